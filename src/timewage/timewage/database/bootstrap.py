from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from .connection import DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql usable regardless of the configured database name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted literals and drop '--' comment lines."""
    lines = [line for line in sql.splitlines() if not line.lstrip().startswith("--")]
    buf: list[str] = []
    quote: str | None = None

    for ch in "\n".join(lines):
        if quote:
            buf.append(ch)
            if ch == quote:
                quote = None
            continue
        if ch in ("'", '"'):
            quote = ch
            buf.append(ch)
            continue
        if ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: Path) -> int:
    """Execute every statement of schema.sql (CREATE TABLE IF NOT EXISTS, idempotent)."""
    sql = _strip_create_db_and_use(schema_path.read_text(encoding="utf-8"))
    count = 0
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
    logger.info("schema applied", extra={"statements": count, "schema_path": str(schema_path)})
    return count
