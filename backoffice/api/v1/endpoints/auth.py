"""
Authentication API endpoints.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.config import settings
from backoffice.core.limiter import limiter
from backoffice.db.session import get_db
from backoffice.controllers.auth_controller import AuthController
from backoffice.schemas.user import LoginRequest, LoginResponse

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    login_data: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """
    Log in with email and password.

    Returns a bearer token to send as ``Authorization: Bearer <token>``.
    Tokens are stateless; logging out is handled client-side by discarding the token.
    """
    controller = AuthController(db)
    return await controller.login(login_data)
