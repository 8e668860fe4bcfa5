"""
Account error taxonomy.

Every error carries the HTTP status it is reported with, so routes only
raise and ``api.middleware`` renders ``{"error": message}``.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorMessages:
    ALL_FIELDS_REQUIRED = "All fields are required"
    USER_ALREADY_EXISTS = "User already exists"
    INVALID_LOGIN_OR_PASSWORD = "Invalid email or password"
    USER_NOT_FOUND = "User not found"
    FORBIDDEN = "Access denied"
    CANNOT_FOLLOW_YOURSELF = "You cannot follow yourself"
    ALREADY_FOLLOWING = "Already following"
    NOT_FOLLOWING = "You are not following this user"
    INTERNAL_SERVER_ERROR = "Internal server error"


class AccountError(Exception):
    """Base class; subclasses fix the default status and message."""

    status_code = 500
    default_message = ErrorMessages.INTERNAL_SERVER_ERROR

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AccountError):
    status_code = 400
    default_message = ErrorMessages.ALL_FIELDS_REQUIRED


class ConflictError(AccountError):
    status_code = 400
    default_message = ErrorMessages.USER_ALREADY_EXISTS


class AuthError(AccountError):
    """Bad credentials. One message for unknown email and wrong password."""

    status_code = 400
    default_message = ErrorMessages.INVALID_LOGIN_OR_PASSWORD


class ForbiddenError(AccountError):
    status_code = 403
    default_message = ErrorMessages.FORBIDDEN


class NotFoundError(AccountError):
    status_code = 404
    default_message = ErrorMessages.USER_NOT_FOUND


class InternalError(AccountError):
    status_code = 500
    default_message = ErrorMessages.INTERNAL_SERVER_ERROR


def error_boundary(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """
    Let ``AccountError`` through; report anything else as ``InternalError``.

    Wraps the public coroutine methods of the account and follow services.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except AccountError:
            raise
        except Exception as exc:
            logger.exception("%s failed", func.__qualname__)
            raise InternalError() from exc

    return wrapper
