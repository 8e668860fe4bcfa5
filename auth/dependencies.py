"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_current_user_id`` and the per-request
service factories used across all routes.
"""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import Settings, get_settings
from core.account_service import AccountService
from core.follow_service import FollowService
from database.session import get_db_session

_bearer_scheme = HTTPBearer()


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Extract and verify the Bearer token, returning the authenticated
    ``user_id`` (UUID string).
    """
    from auth.jwt import verify_token

    return verify_token(credentials.credentials, settings)


def get_account_service(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
) -> AccountService:
    return AccountService(session, settings)


def get_follow_service(
    session: AsyncSession = Depends(db_session),
) -> FollowService:
    return FollowService(session)
