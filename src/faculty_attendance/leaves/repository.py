from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveApplication


class LeaveRepository(Protocol):
    def create(self, *, faculty_id: str, from_date: date, to_date: date, leave_reason: str) -> int:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveApplication]:
        raise NotImplementedError

    def list_for_faculty(self, faculty_id: str, *, newest_first: bool = False) -> Sequence[LeaveApplication]:
        raise NotImplementedError

    def list_by_status(self, status: LeaveStatus) -> Sequence[LeaveApplication]:
        raise NotImplementedError

    def count_by_status(self, status: LeaveStatus) -> int:
        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        decided_by: str,
        leave_days: Sequence[date] = (),
    ) -> bool:
        """Record the decision on a pending application.

        Every day in ``leave_days`` is upserted as an ``L`` attendance row in
        the same transaction. Returns False when the application is missing
        or no longer pending.
        """

        raise NotImplementedError
