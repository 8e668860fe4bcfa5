"""
Auth API routes — register, login.

Route prefix: /api
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from auth.dependencies import get_account_service
from core.account_service import AccountService
from utils.schemas import LoginRequest, RegisterRequest, TokenResponse, UserSummary

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=UserSummary,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    service: AccountService = Depends(get_account_service),
) -> Dict[str, Any]:
    """Register a new user."""
    return await service.register(req.email, req.password, req.name)


@router.post("/login", response_model=TokenResponse)
async def login(
    req: LoginRequest,
    service: AccountService = Depends(get_account_service),
) -> Dict[str, Any]:
    """Login with email + password."""
    token = await service.login(req.email, req.password)
    return {"token": token}
