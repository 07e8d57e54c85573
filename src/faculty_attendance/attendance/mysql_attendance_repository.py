from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_UPSERT_SQL = """
    INSERT INTO faculty_attendance(faculty_id, attendance_date, faculty_status)
    VALUES(%s,%s,%s)
    ON DUPLICATE KEY UPDATE faculty_status=VALUES(faculty_status)
"""

_MARK_PRESENT_SQL = """
    INSERT INTO faculty_attendance(faculty_id, attendance_date, faculty_status)
    VALUES(%s,%s,%s)
    ON DUPLICATE KEY UPDATE faculty_status=IF(faculty_status=%s, faculty_status, VALUES(faculty_status))
"""


def upsert_status_rows(cur, *, faculty_id: str, days: Iterable[date], status: AttendanceStatus) -> int:
    """Upsert one row per day on an open cursor so callers control the transaction."""
    rows = [(faculty_id, day, status.value) for day in days]
    if rows:
        cur.executemany(_UPSERT_SQL, rows)
    return len(rows)


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        faculty_id=str(r["faculty_id"]),
        attendance_date=r["attendance_date"],
        status=AttendanceStatus(r["faculty_status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_date(self, attendance_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, faculty_id, attendance_date, faculty_status
                FROM faculty_attendance
                WHERE attendance_date=%s
                """,
                (attendance_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_faculty(self, faculty_id: str, *, newest_first: bool = False) -> Sequence[AttendanceRecord]:
        order = "DESC" if newest_first else "ASC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT attendance_id, faculty_id, attendance_date, faculty_status
                FROM faculty_attendance
                WHERE faculty_id=%s
                ORDER BY attendance_date {order}
                """,
                (faculty_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_faculty_and_date(self, faculty_id: str, attendance_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, faculty_id, attendance_date, faculty_status
                FROM faculty_attendance
                WHERE faculty_id=%s AND attendance_date=%s
                """,
                (faculty_id, attendance_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert_status(self, *, faculty_id: str, attendance_date: date, status: AttendanceStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            upsert_status_rows(cur, faculty_id=faculty_id, days=[attendance_date], status=status)

    def mark_present(self, *, faculty_id: str, attendance_date: date) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _MARK_PRESENT_SQL,
                (faculty_id, attendance_date, AttendanceStatus.PRESENT.value, AttendanceStatus.LEAVE.value),
            )
