from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..security.crypto import FieldCodecs
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "user_id, username, password_hash, role, name_enc, department_enc, is_active, created_at"


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection, codecs: FieldCodecs):
        self._conn_factory = conn_factory
        self._codecs = codecs

    def _to_user(self, row: Dict[str, Any]) -> User:
        return User(
            user_id=int(row["user_id"]),
            username=row["username"],
            password_hash=row["password_hash"],
            role=Role(row.get("role") or Role.USER.value),
            name=self._codecs.text.decode(row.get("name_enc")),
            department=self._codecs.text.decode(row.get("department_enc")),
            is_active=bool(row.get("is_active", True)),
            created_at=row.get("created_at"),
        )

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return self._to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return self._to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY user_id ASC")
            return [self._to_user(r) for r in fetchall(cur)]
