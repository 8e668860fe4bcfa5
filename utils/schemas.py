"""
Pydantic schemas and public projections for user accounts.

Wire format is camelCase. ``user_summary`` is the only way a ``User`` row
becomes JSON; it goes through ``UserSummary``, whose field list is the
allow-list of what may leave the service.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Requests
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(CamelModel):
    # Presence is checked by the service so a missing field is a 400, not a 422.
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserUpdate(CamelModel):
    """Partial profile update. ``None`` means "leave unchanged"."""

    email: Optional[str] = None
    name: Optional[str] = None
    date_of_birth: Optional[date] = None
    bio: Optional[str] = None
    location: Optional[str] = None


class FollowRequest(CamelModel):
    following_id: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


class TokenResponse(BaseModel):
    token: str


class MessageResponse(BaseModel):
    message: str


class UserSummary(CamelModel):
    id: uuid.UUID
    email: str
    name: Optional[str] = None
    date_of_birth: Optional[date] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FollowEdge(CamelModel):
    id: uuid.UUID
    follower_id: uuid.UUID
    following_id: uuid.UUID
    created_at: Optional[datetime] = None


# ═══════════════════════════════════════════════════════════════════════════════
# Projections
# ═══════════════════════════════════════════════════════════════════════════════


def user_summary(user: Any) -> Dict[str, Any]:
    """Public-safe JSON view of a ``User``. Never contains the password hash."""
    return UserSummary.model_validate(user).model_dump(mode="json", by_alias=True)


def follow_edge(edge: Any, nested: Optional[str] = None) -> Dict[str, Any]:
    """
    JSON view of a ``Follow`` row.

    ``nested`` names the side ("follower" or "following") whose user summary
    is embedded; that relationship must already be loaded.
    """
    data = FollowEdge.model_validate(edge).model_dump(mode="json", by_alias=True)
    if nested:
        data[nested] = user_summary(getattr(edge, nested))
    return data


def user_detail(user: Any, nested: bool = False) -> Dict[str, Any]:
    """Summary plus follower / following edges (relationships must be loaded)."""
    data = user_summary(user)
    data["followers"] = [
        follow_edge(edge, "follower" if nested else None) for edge in user.followers
    ]
    data["following"] = [
        follow_edge(edge, "following" if nested else None) for edge in user.following
    ]
    return data
