"""
Follow Service — create and remove follow edges between users.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import (
    ConflictError,
    ErrorMessages,
    NotFoundError,
    ValidationError,
    error_boundary,
)
from database.helpers import get_follow_edge, to_uuid
from database.models import Follow, User

logger = logging.getLogger(__name__)


class FollowService:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @error_boundary
    async def follow(self, caller_id: str, following_id: Optional[str]) -> None:
        if not following_id:
            raise ValidationError(ErrorMessages.ALL_FIELDS_REQUIRED)

        caller = to_uuid(caller_id)
        target = to_uuid(following_id)
        if target is None or await self._session.get(User, target) is None:
            raise NotFoundError(ErrorMessages.USER_NOT_FOUND)
        if target == caller:
            raise ValidationError(ErrorMessages.CANNOT_FOLLOW_YOURSELF)

        if await get_follow_edge(self._session, caller, target) is not None:
            raise ConflictError(ErrorMessages.ALREADY_FOLLOWING)

        self._session.add(Follow(follower_id=caller, following_id=target))
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise ConflictError(ErrorMessages.ALREADY_FOLLOWING) from exc
        logger.info("User %s now follows %s", caller, target)

    @error_boundary
    async def unfollow(self, caller_id: str, following_id: str) -> None:
        caller = to_uuid(caller_id)
        target = to_uuid(following_id)
        edge = None
        if caller is not None and target is not None:
            edge = await get_follow_edge(self._session, caller, target)
        if edge is None:
            raise NotFoundError(ErrorMessages.NOT_FOLLOWING)

        await self._session.delete(edge)
        await self._session.flush()
        logger.info("User %s unfollowed %s", caller, target)
