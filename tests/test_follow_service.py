"""
Tests for FollowService.
"""

import uuid

import pytest

from core.errors import ConflictError, ErrorMessages, NotFoundError, ValidationError


class TestFollow:
    @pytest.mark.asyncio
    async def test_follow_then_visible_on_profile(self, accounts, follows, session):
        ann = await accounts.register("a@x.com", "pw", "Ann")
        bob = await accounts.register("b@x.com", "pw", "Bob")

        await follows.follow(bob["id"], ann["id"])
        session.expire_all()

        data = await accounts.get_user_by_id(ann["id"], bob["id"])
        assert data["isFollowing"] is True
        reverse = await accounts.get_user_by_id(bob["id"], ann["id"])
        assert reverse["isFollowing"] is False

    @pytest.mark.asyncio
    async def test_cannot_follow_yourself(self, accounts, follows):
        ann = await accounts.register("a@x.com", "pw", "Ann")
        with pytest.raises(ValidationError) as exc_info:
            await follows.follow(ann["id"], ann["id"])
        assert exc_info.value.message == ErrorMessages.CANNOT_FOLLOW_YOURSELF

    @pytest.mark.asyncio
    async def test_duplicate_follow(self, accounts, follows):
        ann = await accounts.register("a@x.com", "pw", "Ann")
        bob = await accounts.register("b@x.com", "pw", "Bob")
        await follows.follow(bob["id"], ann["id"])
        with pytest.raises(ConflictError):
            await follows.follow(bob["id"], ann["id"])

    @pytest.mark.asyncio
    async def test_unknown_target(self, accounts, follows):
        ann = await accounts.register("a@x.com", "pw", "Ann")
        with pytest.raises(NotFoundError):
            await follows.follow(ann["id"], str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_missing_target(self, accounts, follows):
        ann = await accounts.register("a@x.com", "pw", "Ann")
        with pytest.raises(ValidationError):
            await follows.follow(ann["id"], None)


class TestUnfollow:
    @pytest.mark.asyncio
    async def test_unfollow_removes_edge(self, accounts, follows, session):
        ann = await accounts.register("a@x.com", "pw", "Ann")
        bob = await accounts.register("b@x.com", "pw", "Bob")
        await follows.follow(bob["id"], ann["id"])
        await follows.unfollow(bob["id"], ann["id"])
        session.expire_all()

        data = await accounts.get_user_by_id(ann["id"], bob["id"])
        assert data["isFollowing"] is False
        assert data["followers"] == []

    @pytest.mark.asyncio
    async def test_unfollow_without_edge(self, accounts, follows):
        ann = await accounts.register("a@x.com", "pw", "Ann")
        bob = await accounts.register("b@x.com", "pw", "Bob")
        with pytest.raises(NotFoundError) as exc_info:
            await follows.unfollow(bob["id"], ann["id"])
        assert exc_info.value.message == ErrorMessages.NOT_FOLLOWING
