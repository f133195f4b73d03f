"""Schema and demo-data helpers used by ``create_app`` and ``scripts/``."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_WORK_SCHEDULE
from ..core.enums import Role
from ..security.crypto import FieldCodecs
from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_USERS = (
    # (username, password, role, name, department)
    ("admin", "admin123", Role.ADMIN, "Admin Demo", "IT"),
    ("hrd", "hrd123", Role.HRD, "HRD Demo", "HR"),
    ("budi", "user123", Role.USER, "Budi Santoso", "Operasional"),
)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql must work whatever the configured database name is
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside quoted strings."""

    buf: list[str] = []
    quote = ""
    escape = False

    for ch in sql:
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
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
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    """Run schema.sql (CREATE TABLE IF NOT EXISTS ...) against the configured database."""

    ensure_database_exists(db_config)
    target = DBConfig.from_dict(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied to %s", target.describe())


def ensure_demo_data(db_config: dict, codecs: FieldCodecs) -> None:
    """Demo accounts (names encrypted with ``codecs``) and the default work week."""

    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        for username, password, role, name, department in DEMO_USERS:
            cur.execute(
                """
                INSERT INTO users(username, password_hash, role, name_enc, department_enc, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                ON DUPLICATE KEY UPDATE
                    password_hash=VALUES(password_hash),
                    role=VALUES(role),
                    name_enc=VALUES(name_enc),
                    department_enc=VALUES(department_enc),
                    is_active=1
                """,
                (
                    username,
                    generate_password_hash(password),
                    role.value,
                    codecs.text.encode(name),
                    codecs.text.encode(department),
                ),
            )

        cur.executemany(
            """
            INSERT IGNORE INTO work_schedules(day_of_week, day_name, start_time, end_time, is_work_day)
            VALUES(%s,%s,%s,%s,%s)
            """,
            [(day, name, start, end, int(work)) for day, name, start, end, work in DEFAULT_WORK_SCHEDULE],
        )
        conn.commit()
    finally:
        conn.close()
    logger.info("Demo users and default work week ready on %s", target.describe())


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
