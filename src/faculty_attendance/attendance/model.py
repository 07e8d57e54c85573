from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.datetime_utils import format_date
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one faculty's status for one calendar day."""

    attendance_id: int
    faculty_id: str
    attendance_date: date
    status: AttendanceStatus

    def to_dict(self) -> dict:
        return {
            "_id": self.attendance_id,
            "faculty_id": self.faculty_id,
            "attendanceDate": format_date(self.attendance_date),
            "facultyStatus": self.status.value,
        }


@dataclass(frozen=True)
class DashboardSummary:
    """Read-model for the admin dashboard counters."""

    present: int
    absent: int
    on_leave: int
    pending_leaves: int

    def to_dict(self) -> dict:
        return {
            "present": self.present,
            "absent": self.absent,
            "onLeave": self.on_leave,
            "pendingLeaves": self.pending_leaves,
        }
