"""JWT validation and user authentication dependencies.

This module provides:
- JWT validation against the auth provider's JWKS
- User authentication and auto-creation on first request
"""

import logging
import time
import uuid as uuid_pkg
from typing import Annotated, Any

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from jose.backends import ECKey
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.database import get_db
from app.models.user import User

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

# Cache for JWKS with TTL to handle key rotation
_jwks_cache: dict[str, Any] = {}
_jwks_cache_timestamp: float = 0.0
_JWKS_CACHE_TTL_SECONDS: float = 3600.0  # 1 hour


async def _fetch_jwks() -> dict[str, Any]:
    """Fetch JWKS from the auth provider and update the cache."""
    global _jwks_cache_timestamp
    async with httpx.AsyncClient() as client:
        response = await client.get(settings.jwks_url)
        response.raise_for_status()
        jwks = response.json()
        _jwks_cache.clear()
        _jwks_cache.update(jwks)
        _jwks_cache_timestamp = time.monotonic()
        return jwks


async def get_jwks(force_refresh: bool = False) -> dict[str, Any]:
    """Fetch and cache JWKS with a 1-hour TTL."""
    cache_age = time.monotonic() - _jwks_cache_timestamp
    if _jwks_cache and not force_refresh and cache_age < _JWKS_CACHE_TTL_SECONDS:
        return _jwks_cache

    return await _fetch_jwks()


def get_signing_key(jwks: dict[str, Any], token: str) -> ECKey:
    """Get the signing key from JWKS that matches the token's kid."""
    unverified_header = jwt.get_unverified_header(token)
    kid = unverified_header.get("kid")

    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return ECKey(key, algorithm="ES256")

    raise ValueError("Unable to find matching key in JWKS")


async def _decode_token(token: str, force_refresh: bool = False) -> dict[str, Any]:
    """Verify the token signature and audience; ValueError if it has no subject."""
    jwks = await get_jwks(force_refresh=force_refresh)
    signing_key = get_signing_key(jwks, token)
    payload: dict[str, Any] = jwt.decode(
        token,
        signing_key,
        algorithms=["ES256"],
        audience=settings.jwt_audience,
    )
    if payload.get("sub") is None:
        raise ValueError("Token has no subject")
    return payload


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Validate the bearer JWT and return current user.

    Creates user record on first API call if not exists.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    token = credentials.credentials

    try:
        payload = await _decode_token(token)
        user_id = uuid_pkg.UUID(payload["sub"])
    except (JWTError, ValueError) as first_error:
        # Key rotation may have occurred - force a JWKS refresh and retry once
        try:
            logger.info("JWT validation failed with cached JWKS, forcing refresh")
            payload = await _decode_token(token, force_refresh=True)
            user_id = uuid_pkg.UUID(payload["sub"])
        except (JWTError, ValueError, httpx.HTTPError):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Could not validate credentials",
            ) from first_error
    except httpx.HTTPError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from None

    # Get or create user
    statement = select(User).where(User.id == user_id)  # type: ignore[arg-type]
    result = await db.execute(statement)
    user = result.scalar_one_or_none()

    if not user:
        # Create user on first API call after GitHub sign-in
        app_metadata = payload.get("app_metadata", {})
        user_metadata = payload.get("user_metadata", {})

        user = User(
            id=user_id,
            email=payload.get("email"),
            display_name=user_metadata.get("full_name") or user_metadata.get("name"),
            github_username=user_metadata.get("user_name"),
            github_id=user_metadata.get("provider_id"),
            avatar_url=user_metadata.get("avatar_url"),
            auth_provider=app_metadata.get("provider", "github"),
        )
        db.add(user)
        await db.flush()
        await db.refresh(user)

    return user


async def get_current_user_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Get current user if authenticated, None otherwise."""
    if not credentials:
        return None
    try:
        return await get_current_user(credentials, db)
    except HTTPException:
        return None


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_current_user_optional)]
