"""
Account Service — registration, login, profile reads and updates.

One instance per request: it owns nothing but the request's
``AsyncSession`` and the process ``Settings``. Commit / rollback is left to
the session dependency that created the session.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import pydantic
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from auth.jwt import create_token
from auth.password import hash_password, verify_password
from config.settings import Settings
from core.errors import (
    AuthError,
    ConflictError,
    ErrorMessages,
    ForbiddenError,
    NotFoundError,
    ValidationError,
    error_boundary,
)
from database.helpers import get_follow_edge, get_user_by_email, to_uuid
from database.models import Follow, User
from utils.avatar import remove_avatar, write_avatar
from utils.schemas import UserUpdate, user_detail, user_summary

logger = logging.getLogger(__name__)

# Required or typed fields where an empty form value means "not supplied".
_BLANK_MEANS_UNCHANGED = {"email", "date_of_birth", "dateOfBirth"}


class AccountService:
    def __init__(self, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings

    # ── register / login ────────────────────────────────────────────────

    @error_boundary
    async def register(
        self,
        email: Optional[str],
        password: Optional[str],
        name: Optional[str],
    ) -> Dict[str, Any]:
        """Create a user with a generated avatar and return its summary."""
        if not email or not password or not name:
            raise ValidationError(ErrorMessages.ALL_FIELDS_REQUIRED)

        if await get_user_by_email(self._session, email) is not None:
            raise ConflictError(ErrorMessages.USER_ALREADY_EXISTS)

        password_hash = hash_password(password, rounds=self._settings.bcrypt_rounds)
        avatar = write_avatar(name, self._settings)

        user = User(
            email=email,
            password=password_hash,
            name=name,
            avatar_url=self._settings.avatar_url_for(avatar),
        )
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same email.
            remove_avatar(avatar, self._settings)
            raise ConflictError(ErrorMessages.USER_ALREADY_EXISTS) from exc
        except Exception:
            remove_avatar(avatar, self._settings)
            raise

        logger.info("Registered user %s (%s)", user.name, user.id)
        return user_summary(user)

    @error_boundary
    async def login(self, email: Optional[str], password: Optional[str]) -> str:
        """Verify credentials and return a signed token."""
        if not email or not password:
            raise ValidationError(ErrorMessages.ALL_FIELDS_REQUIRED)

        user = await get_user_by_email(self._session, email)
        if user is None or not verify_password(password, user.password):
            raise AuthError(ErrorMessages.INVALID_LOGIN_OR_PASSWORD)

        token = create_token(str(user.id), self._settings)
        logger.info("Login: %s (%s)", user.name, user.id)
        return token

    # ── profile reads ───────────────────────────────────────────────────

    @error_boundary
    async def get_user_by_id(self, user_id: str, caller_id: str) -> Dict[str, Any]:
        """Profile with follow edges and whether the caller follows it."""
        uid = to_uuid(user_id)
        if uid is None:
            raise NotFoundError(ErrorMessages.USER_NOT_FOUND)

        result = await self._session.execute(
            select(User)
            .options(selectinload(User.followers), selectinload(User.following))
            .where(User.id == uid)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError(ErrorMessages.USER_NOT_FOUND)

        caller = to_uuid(caller_id)
        is_following = (
            caller is not None
            and await get_follow_edge(self._session, caller, uid) is not None
        )

        data = user_detail(user)
        data["isFollowing"] = is_following
        return data

    @error_boundary
    async def current(self, caller_id: str) -> Dict[str, Any]:
        """The caller's own profile, edges carrying the related users."""
        uid = to_uuid(caller_id)
        user = None
        if uid is not None:
            result = await self._session.execute(
                select(User)
                .options(
                    selectinload(User.followers).selectinload(Follow.follower),
                    selectinload(User.following).selectinload(Follow.following),
                )
                .where(User.id == uid)
            )
            user = result.scalar_one_or_none()

        if user is None:
            raise NotFoundError(ErrorMessages.USER_NOT_FOUND, status_code=400)
        return user_detail(user, nested=True)

    # ── profile update ──────────────────────────────────────────────────

    @error_boundary
    async def update_user(
        self,
        user_id: str,
        caller_id: str,
        fields: Mapping[str, Any],
        avatar_filename: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Apply a partial update to the caller's own record.

        ``fields`` holds the submitted values keyed by attribute or camelCase
        name. Missing or ``None`` values keep the stored value. An empty
        string clears ``name`` / ``bio`` / ``location`` and is ignored for
        ``email`` and ``date_of_birth``. The avatar URL only changes when
        ``avatar_filename`` names a file stored in this request.
        """
        uid = to_uuid(user_id)
        if uid is None or uid != to_uuid(caller_id):
            raise ForbiddenError(ErrorMessages.FORBIDDEN)

        submitted = {
            k: v
            for k, v in fields.items()
            if v is not None and not (v == "" and k in _BLANK_MEANS_UNCHANGED)
        }
        try:
            update = UserUpdate.model_validate(submitted)
        except pydantic.ValidationError as exc:
            detail = exc.errors()[0]["msg"]
            raise ValidationError(f"Invalid profile data: {detail}") from exc
        changes = {
            k: (None if v == "" else v)
            for k, v in update.model_dump(exclude_unset=True).items()
        }

        if "email" in changes:
            existing = await get_user_by_email(self._session, changes["email"])
            if existing is not None and existing.id != uid:
                raise ConflictError(ErrorMessages.USER_ALREADY_EXISTS)

        user = await self._session.get(User, uid)
        if user is None:
            raise NotFoundError(ErrorMessages.USER_NOT_FOUND)

        for key, value in changes.items():
            setattr(user, key, value)
        if avatar_filename:
            user.avatar_url = self._settings.avatar_url_for(avatar_filename)

        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise ConflictError(ErrorMessages.USER_ALREADY_EXISTS) from exc
        await self._session.refresh(user)

        logger.info("Updated user %s fields=%s", uid, sorted(changes))
        return user_summary(user)
