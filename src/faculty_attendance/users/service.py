from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..auth.tokens import TokenService
from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_text, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewFaculty:
    """Registration payload as submitted by the signup form."""

    name: str
    email: str
    password: str
    fid: str
    gender: Optional[str] = None
    dob: Optional[str] = None
    phone: Optional[str] = None


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


class AuthService:
    """Use case: authenticate user (login) and hand out an access token."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def login(self, email: str, password: str) -> LoginResult:
        email = require_non_empty(email, "Email").lower()
        require_non_empty(password, "Password")
        password = str(password)

        user = self._users.get_by_email(email)
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password)
        except Exception:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        return LoginResult(token=self._tokens.issue(user), user=user)


class UserService:
    """Use cases: faculty registration, profile management and admin user listing."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register_faculty(self, data: NewFaculty) -> int:
        name = require_non_empty(data.name, "Name")
        email = require_non_empty(data.email, "Email").lower()
        fid = require_non_empty(data.fid, "Faculty ID")
        require_non_empty(data.password, "Password")
        password = str(data.password)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        dob = parse_iso_date(data.dob, "Date of birth") if optional_text(data.dob) else None

        if self._users.get_by_email(email):
            raise ConflictError("email", "Faculty already exists")
        if self._users.get_by_fid(fid):
            raise ConflictError("fid", "Faculty ID already exists")

        user_id = self._users.create_user(
            fid=fid,
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.FACULTY,
            gender=optional_text(data.gender),
            dob=dob,
            phone=optional_text(data.phone),
        )
        logger.info("Registered faculty %s (%s)", fid, email)
        return user_id

    def get_profile(self, fid: str) -> User:
        user = self._users.get_by_fid(fid, role=Role.FACULTY)
        if not user:
            raise NotFoundError("Faculty profile not found")
        return user

    def update_profile(self, fid: str, *, phone: Optional[str] = None) -> User:
        self.get_profile(fid)

        phone = optional_text(phone)
        if phone:
            self._users.update_phone(fid, phone)

        return self.get_profile(fid)

    def change_password(self, fid: str, new_password: str) -> None:
        require_non_empty(new_password, "New password")
        new_password = str(new_password)
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        self.get_profile(fid)
        self._users.update_password(fid, generate_password_hash(new_password))

    def list_faculty(self) -> Sequence[User]:
        return self._users.list_by_role(Role.FACULTY)

    def delete_faculty(self, *, current_role: Role, fid: str) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Access denied")

        if not self._users.get_by_fid(fid, role=Role.FACULTY):
            raise NotFoundError("Faculty not found")

        if not self._users.delete_faculty(fid):
            raise NotFoundError("Faculty not found")
        logger.info("Deleted faculty %s with attendance and leave records", fid)
