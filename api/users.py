"""
User profile routes — current user, profile by id, profile update.

Route prefix: /api
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile

from auth.dependencies import get_account_service, get_current_user_id
from config.settings import Settings, get_settings
from core.account_service import AccountService
from utils.avatar import remove_avatar
from utils.schemas import UserSummary
from utils.uploads import save_upload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])

# attribute name → form field name
_PROFILE_FORM_FIELDS = {
    "email": "email",
    "name": "name",
    "date_of_birth": "dateOfBirth",
    "bio": "bio",
    "location": "location",
}


@router.get("/current")
async def current(
    service: AccountService = Depends(get_account_service),
    auth_user_id: str = Depends(get_current_user_id),
) -> Dict[str, Any]:
    """The authenticated user's profile with followers / following."""
    return await service.current(auth_user_id)


@router.get("/users/{user_id}")
async def get_user_by_id(
    user_id: str,
    service: AccountService = Depends(get_account_service),
    auth_user_id: str = Depends(get_current_user_id),
) -> Dict[str, Any]:
    """Any user's profile plus ``isFollowing`` for the caller."""
    return await service.get_user_by_id(user_id, auth_user_id)


@router.put("/users/{user_id}", response_model=UserSummary)
async def update_user(
    user_id: str,
    request: Request,
    avatar: Optional[UploadFile] = File(None),
    service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
    auth_user_id: str = Depends(get_current_user_id),
) -> Dict[str, Any]:
    """
    Partial update of the caller's own profile (multipart form).

    Text fields are read from the raw form: FastAPI maps an empty optional
    ``Form`` value to its default, which would hide an explicit "" (clear).
    """
    form = await request.form()
    fields = {
        attr: form.get(field)
        for attr, field in _PROFILE_FORM_FIELDS.items()
        if field in form and isinstance(form.get(field), str)
    }

    avatar_filename = None
    if avatar is not None and avatar.filename:
        avatar_filename = await save_upload(avatar, settings)

    try:
        return await service.update_user(user_id, auth_user_id, fields, avatar_filename)
    except Exception:
        if avatar_filename:
            remove_avatar(avatar_filename, settings)
        raise
