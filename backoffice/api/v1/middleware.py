"""
API middleware for authentication and authorization.
Centralized enforcement for protected and admin-only routes.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from backoffice.core.security import decode_access_token
from backoffice.db.session import get_db
from backoffice.db.repositories.user_repository import UserRepository
from backoffice.models.user import User

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_authentication(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Centralized authentication dependency.

    Usage:
        @router.get("/endpoint")
        async def my_endpoint(
            current_user: User = Depends(require_authentication)
        ):
            ...

    Returns:
        Current authenticated User

    Raises:
        HTTPException: 401 if the token is missing, invalid or its user no longer exists
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise _unauthorized("Invalid authentication token")

    user_id_str = payload.get("sub")
    if not user_id_str:
        raise _unauthorized("Token missing user ID")

    try:
        user_id = UUID(user_id_str)
    except ValueError:
        raise _unauthorized("Invalid user ID in token")

    user = await UserRepository(db).get(user_id)
    if not user:
        raise _unauthorized("User not found")

    return user


async def require_admin(
    current_user: User = Depends(require_authentication),
) -> User:
    """
    Admin-only dependency.

    Raises:
        HTTPException: 403 if the authenticated user is not an administrator
    """
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user
