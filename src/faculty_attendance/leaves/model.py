from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_date, format_datetime
from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveApplication:
    leave_id: int
    faculty_id: str
    from_date: date
    to_date: date
    leave_reason: str
    status: LeaveStatus
    created_at: Optional[datetime] = None
    decision_by: Optional[str] = None
    decided_at: Optional[datetime] = None

    @property
    def days(self) -> int:
        return (self.to_date - self.from_date).days + 1

    def to_dict(self) -> dict:
        return {
            "_id": self.leave_id,
            "faculty_id": self.faculty_id,
            "fromDate": format_date(self.from_date),
            "toDate": format_date(self.to_date),
            "leaveReason": self.leave_reason,
            "status": self.status.value,
            "decisionBy": self.decision_by,
            "decidedAt": format_datetime(self.decided_at),
            "createdAt": format_datetime(self.created_at),
        }
