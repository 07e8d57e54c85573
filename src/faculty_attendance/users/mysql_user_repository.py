from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, fid, name, email, password_hash, role, gender, dob, phone, created_at"


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        fid=str(row["fid"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        gender=row.get("gender"),
        dob=row.get("dob"),
        phone=row.get("phone"),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_fid(self, fid: str, *, role: Optional[Role] = None) -> Optional[User]:
        sql = f"SELECT {_COLUMNS} FROM users WHERE fid=%s"
        params: list[object] = [fid]
        if role is not None:
            sql += " AND role=%s"
            params.append(role.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(
        self,
        *,
        fid: str,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        gender: Optional[str] = None,
        dob: Optional[date] = None,
        phone: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(fid, name, email, password_hash, role, gender, dob, phone)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (fid, name, email, password_hash, role.value, gender, dob, phone),
            )
            return int(cur.lastrowid)

    def update_phone(self, fid: str, phone: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET phone=%s WHERE fid=%s", (phone, fid))
            return cur.rowcount > 0

    def update_password(self, fid: str, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE fid=%s", (password_hash, fid))
            return cur.rowcount > 0

    def list_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY name", (role.value,))
            return [_to_user(r) for r in fetchall(cur)]

    def list_by_fids(self, fids: Sequence[str]) -> Sequence[User]:
        fids = list(dict.fromkeys(fids))
        if not fids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE fid IN ({in_clause(fids)})", tuple(fids))
            return [_to_user(r) for r in fetchall(cur)]

    def delete_faculty(self, fid: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM faculty_attendance WHERE faculty_id=%s", (fid,))
            cur.execute("DELETE FROM leave_applications WHERE faculty_id=%s", (fid,))
            cur.execute("DELETE FROM users WHERE fid=%s AND role=%s", (fid, Role.FACULTY.value))
            return cur.rowcount > 0
