"""Faculty attendance & leave management backend.

This package is organized by feature modules (users, attendance, leaves, auth)
with a thin Flask JSON controller layer over service/repository layers.
"""
from __future__ import annotations

from .main import create_app

__all__ = ["create_app"]
