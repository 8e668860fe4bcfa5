"""
JSON Web Token creation and verification.

Tokens are HS256-signed JWTs carrying the ``userId`` claim and an ``exp``
expiry. Secret, algorithm and lifetime come from ``Settings``
(env vars: ``JWT_SECRET``, ``JWT_ALGORITHM``, ``JWT_EXPIRY_SECONDS``).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from fastapi import HTTPException, status

from config.settings import Settings

USER_ID_CLAIM = "userId"


def create_token(user_id: str, settings: Settings) -> str:
    """Create a signed token containing ``user_id`` and expiry."""
    now = datetime.now(timezone.utc)
    payload = {
        USER_ID_CLAIM: user_id,
        "iat": now,
        "exp": now + timedelta(seconds=settings.jwt_expiry_seconds),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Return the verified claims. Raises ``jwt.PyJWTError`` subclasses."""
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["exp", USER_ID_CLAIM]},
    )


def verify_token(token: str, settings: Settings) -> str:
    """
    Verify token and return ``user_id``.

    Raises ``HTTPException(401)`` on invalid or expired tokens.
    """
    try:
        return str(decode_token(token, settings)[USER_ID_CLAIM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
        )
    except jwt.PyJWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {exc}",
        )
