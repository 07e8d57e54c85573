"""Bearer-token and role guards for the JSON routes."""
from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import g, request

from ..common.http import error_response
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .tokens import TokenClaims, TokenService

logger = logging.getLogger(__name__)


def extract_token(header_value: Optional[str]) -> Optional[str]:
    """Return the token from ``Bearer <token>`` (a bare token is accepted too)."""
    value = (header_value or "").strip()
    if not value:
        return None
    parts = value.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    if len(parts) == 1 and parts[0].lower() != "bearer":
        return parts[0]
    return None


def current_user() -> TokenClaims:
    return g.current_user


class AuthGuard:
    def __init__(self, tokens: TokenService):
        self._tokens = tokens

    def token_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = extract_token(request.headers.get("Authorization"))
            if not token:
                return error_response("No token, authorization denied", 401)
            try:
                g.current_user = self._tokens.decode(token)
            except AuthenticationError as e:
                logger.debug("Rejected token on %s: %s", request.path, e)
                return error_response(str(e), 401)
            return view(*args, **kwargs)

        return wrapper

    def roles_required(self, *roles: Role):
        allowed = set(roles)

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                claims = g.get("current_user")
                if claims is None or claims.role not in allowed:
                    return error_response("Access denied", 403)
                return view(*args, **kwargs)

            return wrapper

        return decorator
