from fastapi import APIRouter

from lifesim.db.connection import db_pool
from lifesim.scoring.benchmarks import BenchmarkRegistry

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    return {
        "status": "ok",
        "database": db_pool.test_connection(),
        "benchmarks": BenchmarkRegistry.get().get_status(),
    }
