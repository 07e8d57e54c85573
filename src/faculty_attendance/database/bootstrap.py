from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes and '--' comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    in_comment = False
    escape = False
    prev = ""

    for ch in sql:
        if in_comment:
            if ch == "\n":
                in_comment = False
                buf.append(ch)
            prev = ch
            continue

        if escape:
            buf.append(ch)
            escape = False
            prev = ch
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            prev = ch
            continue

        if ch == "-" and prev == "-" and not in_single and not in_double:
            buf.pop()
            in_comment = True
            prev = ""
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            prev = ch
            if stmt:
                yield stmt
            continue

        buf.append(ch)
        prev = ch

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def _run_sql_file(conn_factory: DatabaseConnection, path: str | Path) -> int:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = conn_factory.connect()
    count = 0
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    ensure_database_exists(conn_factory)
    _run_sql_file(conn_factory, schema_path)
    logger.info("Applied schema %s to %s", schema_path, conn_factory.config.describe())


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> int:
    """Run an extra SQL file (sample rows, fixtures) against an existing schema."""
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    count = _run_sql_file(conn_factory, seed_path)
    logger.info("Applied %d seed statements from %s", count, seed_path)
    return count


def ensure_admin_user(db_config: dict, *, fid: str, name: str, email: str, password: str) -> None:
    """Create the admin account, or reset its password and role if it exists."""
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    password_hash = generate_password_hash(password)
    email = email.strip().lower()

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
        existing = cur.fetchone()
        if existing:
            cur.execute(
                "UPDATE users SET name=%s, password_hash=%s, role=%s WHERE email=%s",
                (name, password_hash, Role.ADMIN.value, email),
            )
        else:
            cur.execute(
                """
                INSERT INTO users (fid, name, email, password_hash, role)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (fid, name, email, password_hash, Role.ADMIN.value),
            )
        conn.commit()
    finally:
        conn.close()
    logger.info("Admin account %s ready", email)


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
