from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_date(self, attendance_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_faculty(self, faculty_id: str, *, newest_first: bool = False) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_faculty_and_date(self, faculty_id: str, attendance_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert_status(self, *, faculty_id: str, attendance_date: date, status: AttendanceStatus) -> None:
        """Insert the day's row or overwrite its status (one row per faculty per day)."""

        raise NotImplementedError

    def mark_present(self, *, faculty_id: str, attendance_date: date) -> None:
        """Set the day to P in one statement, leaving an existing L row untouched."""

        raise NotImplementedError
