from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

import mysql.connector

from ..core.exceptions import StorageError
from .connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

# Creation order; foreign keys point at subjects.
TABLES = ("subjects", "lectures", "weekly_schedules", "tasks")

_SKIPPED = re.compile(r"^(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def schema_statements(sql: str) -> list[str]:
    """Split a schema file into executable statements.

    Comment lines are dropped, statements end with ``;`` at the end of a line,
    and ``CREATE DATABASE`` / ``USE`` are skipped so the configured database
    name always wins.
    """
    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    statements = (s.strip() for s in re.split(r";[ \t]*(?:\r?\n|$)", body))
    return [s for s in statements if s and not _SKIPPED.match(s)]


def _connect(db_config: dict, *, with_database: bool = True):
    target = DBConfig.from_dict(db_config)
    params = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
        "use_pure": True,
    }
    if with_database:
        params["database"] = target.database
    try:
        return mysql.connector.connect(**params)
    except mysql.connector.Error as exc:
        raise StorageError(f"Database unavailable: {exc}") from exc


def ensure_database_exists(db_config: dict) -> None:
    name = DBConfig.from_dict(db_config).database
    conn = _connect(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: Optional[str | Path] = None) -> None:
    """Create the database and every missing table (safe to run repeatedly)."""
    ensure_database_exists(db_config)
    statements = schema_statements(Path(schema_path or SCHEMA_PATH).read_text(encoding="utf-8"))

    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    except mysql.connector.Error as exc:
        raise StorageError(f"Applying schema failed: {exc}") from exc
    finally:
        conn.close()
    logger.info("Applied %d schema statement(s)", len(statements))


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def missing_tables(db_config: dict) -> list[str]:
    present = set(list_tables(db_config))
    return [t for t in TABLES if t not in present]
