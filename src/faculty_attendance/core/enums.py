from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles carried in access tokens and checked by route guards."""

    ADMIN = "admin"
    FACULTY = "faculty"


class AttendanceStatus(str, Enum):
    """Single-letter day status stored per faculty per date."""

    PRESENT = "P"
    LEAVE = "L"
    ABSENT = "A"


class LeaveStatus(str, Enum):
    """Approval state of a leave application."""

    PENDING = "Pending"
    APPROVED = "Approved"
    DENIED = "Denied"
