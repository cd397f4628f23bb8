from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from .connection import DBConfig, DatabaseConnection
from .mysql_base import quote_identifier

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    # Splits on ';' outside quotes; enough for schema files.
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in _strip_comments(sql):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run(conn_factory: DatabaseConnection, statements: Iterable[str], *, server_only: bool = False) -> int:
    count = 0
    conn = conn_factory.connect(server_only=server_only)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_mapping(db_config)
    _run(
        DatabaseConnection(config),
        [f"CREATE DATABASE IF NOT EXISTS {quote_identifier(config.database)} CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"],
        server_only=True,
    )


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> int:
    """Create tables and views; returns the number of statements executed."""

    config = DBConfig.from_mapping(db_config)
    ensure_database_exists(db_config)

    statements = list(iter_sql_statements(Path(schema_path).read_text(encoding="utf-8")))
    count = _run(DatabaseConnection(config), statements)

    logger.info("schema applied to %s (%d statements)", config.database, count)
    return count
