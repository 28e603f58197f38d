"""
User repository for database operations.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from backoffice.core.exceptions import DuplicateUserError
from backoffice.db.repositories.base_repository import BaseRepository
from backoffice.models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for user operations."""

    duplicate_error = DuplicateUserError
    duplicate_message = "User with this email already exists"

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (lowercased) email."""
        async with self._storage_errors():
            result = await self.session.execute(
                select(User).where(User.email == email.lower())
            )
            return result.scalar_one_or_none()

    async def list_ordered(self) -> List[User]:
        """List users ordered by email."""
        async with self._storage_errors():
            result = await self.session.execute(select(User).order_by(User.email.asc()))
            return list(result.scalars().all())
