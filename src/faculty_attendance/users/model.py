from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_date, format_datetime
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an admin or faculty account.

    ``fid`` is the public identifier used in tokens, routes and the
    attendance/leave tables; ``user_id`` is the row id.
    """

    user_id: int
    fid: str
    name: str
    email: str
    password_hash: str
    role: Role
    gender: Optional[str] = None
    dob: Optional[date] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        # password_hash stays server-side
        return {
            "_id": self.user_id,
            "fid": self.fid,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "gender": self.gender,
            "dob": format_date(self.dob),
            "phone": self.phone,
            "facialEncoding": [],
            "createdAt": format_datetime(self.created_at),
        }

    def summary(self) -> dict:
        return {"fid": self.fid, "name": self.name}
