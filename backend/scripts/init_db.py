#!/usr/bin/env python3
"""Create the scenario and health score tables.

Usage:
  cd backend
  python scripts/init_db.py                      # SQL Server via SQLSERVER_CONN_STRING
  python scripts/init_db.py --sqlite local.db    # local SQLite file
  python scripts/init_db.py --seed-templates     # also store the built-in templates
"""
from __future__ import annotations

import argparse
import json
import logging
import sqlite3
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lifesim.db.connection import db_pool
from lifesim.db.schema import create_schema
from lifesim.simulation.scenarios import DEFAULT_TEMPLATES

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s", datefmt="%H:%M:%S")
logger = logging.getLogger(__name__)


def seed_templates(conn) -> None:
    cursor = conn.cursor()
    cursor.executemany(
        """
        INSERT INTO ScenarioTemplates
            (TemplateID, Name, Description, ScenarioType, DefaultParameters, IsActive)
        VALUES (?, ?, ?, ?, ?, 1)
        """,
        [
            (t.template_id, t.name, t.description, t.scenario_type.value,
             json.dumps(t.default_parameters))
            for t in DEFAULT_TEMPLATES
        ],
    )
    conn.commit()
    logger.info("Seeded %d scenario templates", len(DEFAULT_TEMPLATES))


def main():
    parser = argparse.ArgumentParser(description="Create the life scenario database schema")
    parser.add_argument("--sqlite", help="Create the tables in this SQLite file instead of SQL Server")
    parser.add_argument("--seed-templates", action="store_true", help="Insert the built-in templates")
    args = parser.parse_args()

    if args.sqlite:
        conn = sqlite3.connect(args.sqlite)
        dialect = "sqlite"
    else:
        db_pool.initialize()
        conn = db_pool.get_connection()
        dialect = "sqlserver"

    try:
        create_schema(conn, dialect)
        if args.seed_templates:
            seed_templates(conn)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
