"""
User controller.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.controllers.base_controller import BaseController
from backoffice.models.user import User
from backoffice.services.user_service import UserService
from backoffice.schemas.user import UserCreate, UserUpdate, UserResponse


class UserController(BaseController):
    """Controller for user operations."""

    def __init__(self, session: AsyncSession):
        self.user_service = UserService(session)

    async def create_user(self, user_data: UserCreate) -> UserResponse:
        return await self.user_service.create_user(user_data)

    async def list_users(self) -> List[UserResponse]:
        return await self.user_service.list_users()

    async def get_user(self, user_id: UUID) -> UserResponse:
        return await self.user_service.get_user(user_id)

    async def update_user(self, user_id: UUID, user_data: UserUpdate, current_user: User) -> UserResponse:
        return await self.user_service.update_user(user_id, user_data, current_user)

    async def delete_user(self, user_id: UUID) -> None:
        await self.user_service.delete_user(user_id)
