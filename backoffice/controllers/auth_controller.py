"""
Authentication controller.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.controllers.base_controller import BaseController
from backoffice.services.auth_service import AuthService
from backoffice.schemas.user import LoginRequest, LoginResponse


class AuthController(BaseController):
    """Controller for authentication operations."""

    def __init__(self, session: AsyncSession):
        self.auth_service = AuthService(session)

    async def login(self, login_data: LoginRequest) -> LoginResponse:
        """
        Authenticate a user with email and password.

        Args:
            login_data: Email and password

        Returns:
            LoginResponse with token and user info
        """
        return await self.auth_service.login(login_data)
