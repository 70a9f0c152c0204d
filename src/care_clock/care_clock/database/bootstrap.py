from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes and -- comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False
    in_comment = False

    for i, ch in enumerate(sql):
        if in_comment:
            if ch == "\n":
                in_comment = False
                buf.append(ch)
            continue

        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "-" and not in_single and not in_double and sql[i + 1 : i + 2] == "-":
            in_comment = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Database schema applied from %s", schema_path)


def ensure_default_facility(db_config: dict, *, name: str, latitude: float, longitude: float, radius_meters: float) -> None:
    """Insert the configured facility when the settings table is empty."""
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SELECT COUNT(*) FROM facility_settings")
        (count,) = cur.fetchone()
        if not count:
            cur.execute(
                """
                INSERT INTO facility_settings (facility_name, latitude, longitude, radius_meters)
                VALUES (%s, %s, %s, %s)
                """,
                (name, latitude, longitude, radius_meters),
            )
            logger.info("Created default facility %r", name)
        conn.commit()
    finally:
        conn.close()


def ensure_manager(db_config: dict, *, email: str, name: str, password: str) -> None:
    """Create or refresh the bootstrap manager account."""
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        password_hash = generate_password_hash(password)
        cur.execute("SELECT employee_pk FROM employees WHERE email=%s", (email,))
        if cur.fetchone():
            cur.execute(
                "UPDATE employees SET name=%s, password_hash=%s, role='MANAGER', is_active=1 WHERE email=%s",
                (name, password_hash, email),
            )
        else:
            cur.execute(
                """
                INSERT INTO employees (employee_code, name, email, role, department, position, password_hash)
                VALUES ('MGR001', %s, %s, 'MANAGER', 'Management', 'Facility Manager', %s)
                """,
                (name, email, password_hash),
            )
        conn.commit()
    finally:
        conn.close()
