from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for accounts.

    Services depend on this Protocol, never on a concrete database driver.
    """

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_fid(self, fid: str, *, role: Optional[Role] = None) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        fid: str,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        gender: Optional[str] = None,
        dob: Optional[date] = None,
        phone: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_phone(self, fid: str, phone: str) -> bool:
        raise NotImplementedError

    def update_password(self, fid: str, password_hash: str) -> bool:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[User]:
        raise NotImplementedError

    def list_by_fids(self, fids: Sequence[str]) -> Sequence[User]:
        raise NotImplementedError

    def delete_faculty(self, fid: str) -> bool:
        """Delete a faculty account together with its attendance and leave rows."""

        raise NotImplementedError
