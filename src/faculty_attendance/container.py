from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.middleware import AuthGuard
from .auth.tokens import TokenService
from .common.datetime_utils import today_local
from .core.constants import DEFAULT_TOKEN_HOURS
from .database.connection import DatabaseConnection, DBConfig
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository

    tokens: TokenService
    auth_guard: AuthGuard

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    leave_service: LeaveService

    conn: Optional[DatabaseConnection] = None


def assemble(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    jwt_secret: str,
    jwt_expires_hours: int = DEFAULT_TOKEN_HOURS,
    today: Callable[[], date] = today_local,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services around the given repositories (MySQL or in-memory)."""
    tokens = TokenService(jwt_secret, expires_hours=jwt_expires_hours)

    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        tokens=tokens,
        auth_guard=AuthGuard(tokens),
        auth_service=AuthService(users_repo, tokens),
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(attendance_repo, users_repo, leaves_repo, today=today),
        leave_service=LeaveService(leaves_repo, users_repo),
        conn=conn,
    )


def build_container(*, db_config: dict, jwt_secret: str, jwt_expires_hours: int = DEFAULT_TOKEN_HOURS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        jwt_secret=jwt_secret,
        jwt_expires_hours=jwt_expires_hours,
        conn=conn,
    )
