from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..attendance.mysql_attendance_repository import upsert_status_rows
from ..core.enums import AttendanceStatus, LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveApplication
from .repository import LeaveRepository

_COLUMNS = "leave_id, faculty_id, from_date, to_date, leave_reason, status, created_at, decision_by, decided_at"


def _to_leave(r: Dict[str, Any]) -> LeaveApplication:
    return LeaveApplication(
        leave_id=int(r["leave_id"]),
        faculty_id=str(r["faculty_id"]),
        from_date=r["from_date"],
        to_date=r["to_date"],
        leave_reason=r["leave_reason"],
        status=LeaveStatus(r["status"]),
        created_at=r.get("created_at"),
        decision_by=r.get("decision_by"),
        decided_at=r.get("decided_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, faculty_id: str, from_date: date, to_date: date, leave_reason: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_applications(faculty_id, from_date, to_date, leave_reason, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (faculty_id, from_date, to_date, leave_reason, LeaveStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, leave_id: int) -> Optional[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_applications WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_for_faculty(self, faculty_id: str, *, newest_first: bool = False) -> Sequence[LeaveApplication]:
        order = "DESC" if newest_first else "ASC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_applications
                WHERE faculty_id=%s
                ORDER BY from_date {order}, leave_id {order}
                """,
                (faculty_id,),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_by_status(self, status: LeaveStatus) -> Sequence[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_applications WHERE status=%s ORDER BY created_at, leave_id",
                (status.value,),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def count_by_status(self, status: LeaveStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM leave_applications WHERE status=%s", (status.value,))
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        decided_by: str,
        leave_days: Sequence[date] = (),
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_applications
                SET status=%s, decision_by=%s, decided_at=NOW()
                WHERE leave_id=%s AND status=%s
                """,
                (status.value, decided_by, int(leave_id), LeaveStatus.PENDING.value),
            )
            if cur.rowcount == 0:
                return False

            cur.execute("SELECT faculty_id FROM leave_applications WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            upsert_status_rows(cur, faculty_id=str(r["faculty_id"]), days=leave_days, status=AttendanceStatus.LEAVE)
            return True
