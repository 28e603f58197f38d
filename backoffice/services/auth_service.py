"""
Authentication service.
Verifies credentials and issues bearer tokens.
"""

from datetime import timedelta
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.config import settings
from backoffice.core.security import create_access_token
from backoffice.models.user import User
from backoffice.schemas.user import LoginRequest, LoginResponse, UserResponse
from backoffice.services.base_service import BaseService
from backoffice.services.user_service import UserService


class AuthService(BaseService):
    """Service for authentication operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.user_service = UserService(session)

    def issue_token(self, user: User) -> str:
        """Create an access token carrying the user's id, email and role."""
        token_data = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
        }
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        return create_access_token(data=token_data, expires_delta=expires_delta)

    async def login(self, login_data: LoginRequest) -> LoginResponse:
        """
        Authenticate with email and password.

        Raises:
            AuthenticationError: unknown email or wrong password
        """
        user = await self.user_service.authenticate(login_data.email, login_data.password)

        return LoginResponse(
            access_token=self.issue_token(user),
            token_type="bearer",
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            user=UserResponse.model_validate(user),
        )
