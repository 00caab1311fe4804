"""API dependencies."""

from .auth import (
    CurrentUser,
    DbSession,
    OptionalUser,
    get_current_user,
    get_current_user_optional,
    get_jwks,
    get_signing_key,
    security,
)

__all__ = [
    "security",
    "get_jwks",
    "get_signing_key",
    "get_current_user",
    "get_current_user_optional",
    "DbSession",
    "CurrentUser",
    "OptionalUser",
]
