from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from ..common.datetime_utils import iter_dates
from ..common.validators import require_non_empty
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import LeaveApplication
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

DECISION_STATUSES = (LeaveStatus.APPROVED, LeaveStatus.DENIED)


def leave_days(from_date: date, to_date: date) -> list[date]:
    """Every calendar day covered by a leave, both ends inclusive."""
    return list(iter_dates(from_date, to_date))


class LeaveService:
    """Use cases: applying for leave and the admin approval workflow."""

    def __init__(self, leaves: LeaveRepository, users: UserRepository):
        self._leaves = leaves
        self._users = users

    def apply(
        self,
        *,
        current_role: Role,
        faculty_id: str,
        from_date: date,
        to_date: date,
        leave_reason: str,
    ) -> LeaveApplication:
        if current_role != Role.FACULTY:
            raise AuthorizationError("Access denied")

        if to_date < from_date:
            raise ValidationError("toDate must be on or after fromDate")

        leave_reason = require_non_empty(leave_reason, "Leave reason")
        if not self._users.get_by_fid(faculty_id, role=Role.FACULTY):
            raise NotFoundError("Faculty profile not found")

        leave_id = self._leaves.create(
            faculty_id=faculty_id,
            from_date=from_date,
            to_date=to_date,
            leave_reason=leave_reason,
        )

        leave = self._leaves.get_by_id(leave_id)
        if not leave:
            raise ValidationError("Submitting leave application failed")
        logger.info("Faculty %s applied for leave %s (%s..%s)", faculty_id, leave_id, from_date, to_date)
        return leave

    def list_pending_with_faculty(self) -> list[dict]:
        pending = self._leaves.list_by_status(LeaveStatus.PENDING)
        faculty = {u.fid: u for u in self._users.list_by_fids([l.faculty_id for l in pending])}

        out: list[dict] = []
        for leave in pending:
            row = leave.to_dict()
            user = faculty.get(leave.faculty_id)
            row["faculty"] = user.summary() if user else None
            out.append(row)
        return out

    def decide(self, *, current_role: Role, admin_id: str, leave_id: int | str, status: str) -> LeaveApplication:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Access denied")

        try:
            decision = LeaveStatus(status)
        except ValueError:
            decision = None
        if decision not in DECISION_STATUSES:
            raise ValidationError("Invalid status. Must be either Approved or Denied.")

        try:
            leave_id = int(leave_id)
        except (TypeError, ValueError):
            raise NotFoundError("Leave application not found")

        leave = self._leaves.get_by_id(leave_id)
        if not leave:
            raise NotFoundError("Leave application not found")
        if leave.status != LeaveStatus.PENDING:
            raise ValidationError("Leave application has already been processed")

        days: Sequence[date] = ()
        if decision == LeaveStatus.APPROVED:
            days = leave_days(leave.from_date, leave.to_date)

        if not self._leaves.decide(leave_id=leave.leave_id, status=decision, decided_by=admin_id, leave_days=days):
            raise ValidationError("Leave application has already been processed")

        decided = self._leaves.get_by_id(leave.leave_id)
        if not decided:
            raise NotFoundError("Leave application not found")
        logger.info(
            "Leave %s for faculty %s %s by %s (%d day(s))",
            decided.leave_id,
            decided.faculty_id,
            decision.value.lower(),
            admin_id,
            leave.days,
        )
        return decided

