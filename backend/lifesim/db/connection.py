"""Connections to the scenario store and the transaction helper the writes share."""
from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

try:
    import pyodbc
except ImportError:
    pyodbc = None

from lifesim.config import settings

logger = logging.getLogger(__name__)


class DatabasePool:
    """Hands out pyodbc connections to the SQL Server scenario store.

    Connections are opened with autocommit off; callers commit through
    `transaction()`.
    """

    def __init__(self):
        self._conn_string: str = ""
        self._initialized: bool = False

    def initialize(self):
        self._conn_string = settings.SQLSERVER_CONN_STRING
        self._initialized = bool(self._conn_string)
        if self._initialized:
            logger.info("Scenario store configured")
        else:
            logger.warning("No SQLSERVER_CONN_STRING configured, saving scenarios and scores will fail")

    @property
    def is_configured(self) -> bool:
        return self._initialized and bool(self._conn_string)

    def get_connection(self, retries: int = 3, delay: float = 1.0):
        if pyodbc is None:
            raise RuntimeError("pyodbc is not installed (missing ODBC driver)")
        if not self.is_configured:
            raise RuntimeError("Scenario store not configured: set SQLSERVER_CONN_STRING")

        for attempt in range(1, retries + 1):
            try:
                return pyodbc.connect(self._conn_string, timeout=30, autocommit=False)
            except pyodbc.Error as e:
                logger.warning("Connect attempt %d/%d failed: %s", attempt, retries, e)
                if attempt == retries:
                    raise RuntimeError(f"Failed to connect after {retries} attempts: {e}") from e
                time.sleep(delay)

    def test_connection(self) -> dict:
        if pyodbc is None:
            return {"status": "unavailable", "message": "pyodbc not installed"}
        if not self.is_configured:
            return {"status": "not_configured", "message": "No connection string set"}
        try:
            conn = self.get_connection(retries=1)
            try:
                cursor = conn.cursor()
                cursor.execute("SELECT COUNT(*) FROM FinancialScenarios")
                return {"status": "connected", "saved_scenarios": cursor.fetchone()[0]}
            finally:
                conn.close()
        except Exception as e:
            return {"status": "error", "message": str(e)}

    def close(self):
        logger.info("Scenario store pool closed")
        self._initialized = False


@contextmanager
def transaction(conn) -> Iterator[Any]:
    """Yield a cursor; commit on success, roll back and re-raise on any error."""
    cursor = conn.cursor()
    try:
        yield cursor
        conn.commit()
    except Exception:
        conn.rollback()
        raise


def fetch_dicts(cursor, rows=None) -> list[dict[str, Any]]:
    """Zip fetched rows with the cursor's column names."""
    if rows is None:
        rows = cursor.fetchall()
    columns = [desc[0] for desc in cursor.description]
    return [dict(zip(columns, row)) for row in rows]


db_pool = DatabasePool()
