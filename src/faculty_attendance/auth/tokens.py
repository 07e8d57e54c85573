from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import jwt

from ..core.constants import DEFAULT_TOKEN_HOURS, TOKEN_ALGORITHM
from ..core.enums import Role
from ..core.exceptions import AuthenticationError

if TYPE_CHECKING:
    from ..users.model import User


class TokenExpiredError(AuthenticationError):
    """Raised when a token's ``exp`` claim is in the past."""


@dataclass(frozen=True)
class TokenClaims:
    """The caller identity decoded from a bearer token."""

    id: str
    role: Role
    name: str = ""


class TokenService:
    """Issue and verify HS256 access tokens (PyJWT)."""

    def __init__(self, secret: str, *, expires_hours: int = DEFAULT_TOKEN_HOURS, algorithm: str = TOKEN_ALGORITHM):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._expires = timedelta(hours=int(expires_hours))
        self._algorithm = algorithm

    def issue(self, user: "User") -> str:
        payload = {
            "id": user.fid,
            "role": user.role.value,
            "name": user.name,
            "exp": datetime.now(timezone.utc) + self._expires,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenClaims:
        try:
            data = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Token is not valid")

        try:
            return TokenClaims(id=str(data["id"]), role=Role(data["role"]), name=str(data.get("name") or ""))
        except (KeyError, ValueError):
            raise AuthenticationError("Token is not valid")
