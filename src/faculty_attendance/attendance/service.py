from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from ..common.datetime_utils import today_local
from ..core.enums import AttendanceStatus, LeaveStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..leaves.repository import LeaveRepository
from ..users.repository import UserRepository
from .model import AttendanceRecord, DashboardSummary
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases: daily presence, the admin dashboard and per-faculty history."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        leaves: LeaveRepository,
        *,
        today: Callable[[], date] = today_local,
    ):
        self._attendance = attendance
        self._users = users
        self._leaves = leaves
        self._today = today

    def dashboard(self) -> DashboardSummary:
        today = self._today()
        faculties = self._users.list_by_role(Role.FACULTY)
        records = self._attendance.list_for_date(today)

        present = {r.faculty_id for r in records if r.status == AttendanceStatus.PRESENT}
        on_leave = {r.faculty_id for r in records if r.status == AttendanceStatus.LEAVE}
        absent = [f for f in faculties if f.fid not in present and f.fid not in on_leave]

        return DashboardSummary(
            present=len(present),
            absent=len(absent),
            on_leave=len(on_leave),
            pending_leaves=self._leaves.count_by_status(LeaveStatus.PENDING),
        )

    def mark_present(self, faculty_id: str) -> AttendanceRecord:
        if not self._users.get_by_fid(faculty_id, role=Role.FACULTY):
            raise NotFoundError("Faculty profile not found")

        today = self._today()
        # Conditional write; an existing L row is kept.
        self._attendance.mark_present(faculty_id=faculty_id, attendance_date=today)

        record = self._attendance.get_for_faculty_and_date(faculty_id, today)
        if not record:
            raise ValidationError("Marking attendance failed")
        if record.status == AttendanceStatus.LEAVE:
            raise ValidationError("You are on approved leave today")

        logger.info("Faculty %s marked present for %s", faculty_id, today)
        return record

    def attendance_and_leave(self, *, current_role: Role, current_id: str, faculty_id: str) -> dict:
        if current_role == Role.FACULTY and current_id != faculty_id:
            raise AuthorizationError("Access denied")

        return {
            "attendanceRecords": [r.to_dict() for r in self._attendance.list_for_faculty(faculty_id)],
            "leaveDetails": [l.to_dict() for l in self._leaves.list_for_faculty(faculty_id)],
        }

    def faculty_details(self, faculty_id: str) -> dict:
        faculty = self._users.get_by_fid(faculty_id, role=Role.FACULTY)
        attendance = self._attendance.list_for_faculty(faculty_id, newest_first=True)
        leaves = self._leaves.list_for_faculty(faculty_id, newest_first=True)

        return {
            "facultyData": faculty.to_dict() if faculty else None,
            "attendanceRecords": [r.to_dict() for r in attendance],
            "leaveDetails": [l.to_dict() for l in leaves],
        }

