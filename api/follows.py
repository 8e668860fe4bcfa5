"""
Follow routes.

Route prefix: /api
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from auth.dependencies import get_current_user_id, get_follow_service
from core.follow_service import FollowService
from utils.schemas import FollowRequest, MessageResponse

router = APIRouter(tags=["follows"])


@router.post(
    "/follow",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def follow(
    req: FollowRequest,
    service: FollowService = Depends(get_follow_service),
    auth_user_id: str = Depends(get_current_user_id),
) -> Dict[str, Any]:
    await service.follow(auth_user_id, req.following_id)
    return {"message": "Followed successfully"}


@router.delete("/unfollow/{user_id}", response_model=MessageResponse)
async def unfollow(
    user_id: str,
    service: FollowService = Depends(get_follow_service),
    auth_user_id: str = Depends(get_current_user_id),
) -> Dict[str, Any]:
    await service.unfollow(auth_user_id, user_id)
    return {"message": "Unfollowed successfully"}
