"""
Authentication and Authorization Module

Provides authentication dependencies for FastAPI endpoints.
Bearer tokens are validated with the helpers in security.py and turned
into a ``CurrentUser``; role and ownership checks build on top of it.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.errors import ForbiddenError
from app.core.security import ACCESS_TOKEN_TYPE, TokenError, decode_token
from app.modules.users.models import UserRole

logger = logging.getLogger(__name__)

# auto_error is off so missing and malformed headers get distinct error codes
security = HTTPBearer(
    auto_error=False,
    description="JWT Bearer token for authentication",
)


@dataclass
class CurrentUser:
    """
    The authenticated caller, populated from JWT claims.

    Attributes:
        id: User ID (``sub`` claim)
        email: User's email address
        role: One of the ``UserRole`` values
    """

    id: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def is_teacher(self) -> bool:
        """Teachers and admins share teacher privileges."""
        return self.role in (UserRole.TEACHER.value, UserRole.ADMIN.value)

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT.value

    def __str__(self) -> str:
        return f"CurrentUser(id={self.id}, email={self.email}, role={self.role})"


def _unauthorized(error_code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error_code, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


def _user_from_token(token: str) -> CurrentUser:
    """
    Validate a JWT and extract the caller.

    Raises:
        HTTPException 401: If the token is expired, invalid or not an access token
    """
    try:
        payload = decode_token(token)
    except TokenError as e:
        logger.warning(f"Rejected token: {e.error_code}")
        raise _unauthorized(e.error_code, e.message) from e

    if payload.get("type", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
        logger.warning(f"Invalid token type: {payload.get('type')}")
        raise _unauthorized("AUTH_TOKEN_INVALID", "This endpoint requires an access token")

    role = payload.get("role", "")
    if role not in {r.value for r in UserRole}:
        logger.warning(f"Token for {payload.get('sub')} carries unknown role '{role}'")
        raise _unauthorized("AUTH_TOKEN_INVALID", "Token contains invalid or missing claims")

    return CurrentUser(
        id=str(payload["sub"]),
        email=payload.get("email", ""),
        role=role,
    )


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> CurrentUser:
    """
    FastAPI dependency that returns the authenticated caller.

    Raises:
        HTTPException 401: AUTH_UNAUTHORIZED when no token is sent,
            AUTH_INVALID_FORMAT when the header is not ``Bearer <token>``,
            AUTH_TOKEN_EXPIRED / AUTH_TOKEN_INVALID for bad tokens
    """
    if credentials is None:
        if request.headers.get("Authorization"):
            raise _unauthorized(
                "AUTH_INVALID_FORMAT",
                "Invalid authorization header format. Expected: Bearer <token>",
            )
        raise _unauthorized("AUTH_UNAUTHORIZED", "No authorization token provided")

    return _user_from_token(credentials.credentials)


async def get_optional_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> CurrentUser | None:
    """Return the caller if a valid token is sent, otherwise None."""
    if credentials is None:
        return None
    try:
        return await get_current_user(request, credentials)
    except HTTPException:
        return None


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[CurrentUser]]:
    """
    Build a dependency that only admits the given roles.

    Usage:
        @router.post("/", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    """
    allowed = {role.value for role in roles}

    async def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in allowed:
            logger.warning(
                f"Access denied: user {user.id} has role '{user.role}', "
                f"requires one of {sorted(allowed)}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "error": "AUTH_FORBIDDEN",
                    "message": "You do not have permission to access this resource",
                },
            )
        return user

    return dependency


require_teacher = require_roles(UserRole.TEACHER, UserRole.ADMIN)
require_admin = require_roles(UserRole.ADMIN)
require_student = require_roles(UserRole.STUDENT)


def ensure_student_access(user: CurrentUser, student_id: str) -> None:
    """
    Staff may act on any student; a student only on themselves.

    Raises:
        ForbiddenError: If a student targets another student's data
    """
    if user.is_teacher or user.id == str(student_id):
        return
    logger.warning(f"User {user.id} denied access to student {student_id}")
    raise ForbiddenError("You can only access your own data")


def ensure_owner(user: CurrentUser, owner_id: str | None) -> None:
    """
    Only the owner of a resource or an admin may modify it.

    Raises:
        ForbiddenError: If the caller is neither
    """
    if user.is_admin or (owner_id is not None and user.id == str(owner_id)):
        return
    logger.warning(f"User {user.id} denied modification of resource owned by {owner_id}")
    raise ForbiddenError("You can only modify resources you created")


__all__ = [
    "CurrentUser",
    "get_current_user",
    "get_optional_user",
    "require_roles",
    "require_teacher",
    "require_admin",
    "require_student",
    "ensure_student_access",
    "ensure_owner",
]
