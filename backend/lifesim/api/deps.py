from collections.abc import Generator

from fastapi import Depends

from lifesim.db.connection import db_pool
from lifesim.db.repository import SqlRepository
from lifesim.scoring.benchmarks import BenchmarkProvider, BenchmarkRegistry


def get_db() -> Generator:
    """FastAPI dependency that yields a DB connection and closes it after use."""
    conn = db_pool.get_connection()
    try:
        yield conn
    finally:
        conn.close()


def get_repository(conn=Depends(get_db)) -> SqlRepository:
    return SqlRepository(conn)


def get_benchmark_provider(repository=Depends(get_repository)) -> BenchmarkProvider:
    """Prefer the benchmark file loaded at startup, else the benchmark table."""
    registry = BenchmarkRegistry.get()
    return registry if registry.benchmarks else repository
