"""
User service with account management business logic.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.exceptions import (
    AuthenticationError,
    DuplicateUserError,
    NotFoundError,
    PermissionDeniedError,
)
from backoffice.core.logging import get_logger
from backoffice.core.security import get_password_hash, verify_password
from backoffice.db.repositories.user_repository import UserRepository
from backoffice.models.user import User, UserRole
from backoffice.schemas.user import UserCreate, UserUpdate, UserResponse
from backoffice.services.base_service import BaseService

logger = get_logger(__name__)


class UserService(BaseService):
    """Service for user operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.user_repo = UserRepository(session)

    async def get_user_model(self, user_id: UUID) -> User:
        """Resolve a user by ID or raise NotFoundError."""
        user = await self.user_repo.get(user_id)
        if not user:
            raise NotFoundError(f"User with ID {user_id} not found")
        return user

    async def create_user(self, user_data: UserCreate) -> UserResponse:
        """
        Register a new user with a hashed password.

        Self-registered accounts always get the user role; administrators promote
        accounts through update_user.
        """
        email = user_data.email.lower()
        if await self.user_repo.get_by_email(email):
            raise DuplicateUserError("User with this email already exists")

        user = await self.user_repo.create(
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            email=email,
            hashed_password=get_password_hash(user_data.password),
            role=UserRole.USER,
        )
        await self.session.commit()
        logger.info("User created", extra={"user_id": str(user.id), "role": user.role.value})
        return UserResponse.model_validate(user)

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user matching the credentials or raise AuthenticationError."""
        user = await self.user_repo.get_by_email(email)
        if not user or not verify_password(password, user.hashed_password):
            logger.warning("Failed login attempt", extra={"email": email.lower()})
            raise AuthenticationError("Invalid credentials")
        return user

    async def list_users(self) -> List[UserResponse]:
        """List users ordered by email."""
        users = await self.user_repo.list_ordered()
        return [UserResponse.model_validate(u) for u in users]

    async def get_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""
        return UserResponse.model_validate(await self.get_user_model(user_id))

    async def update_user(
        self,
        user_id: UUID,
        user_data: UserUpdate,
        current_user: User,
    ) -> UserResponse:
        """
        Update a user.

        Non-admins may only update their own account and may not change roles.
        """
        if not current_user.is_admin:
            if current_user.id != user_id:
                raise PermissionDeniedError("You can only update your own account")
            if user_data.role is not None:
                raise PermissionDeniedError("Only administrators can change roles")

        user = await self.get_user_model(user_id)
        update_fields = user_data.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in update_fields:
            email = update_fields["email"].lower()
            if email != user.email:
                existing = await self.user_repo.get_by_email(email)
                if existing:
                    raise DuplicateUserError("User with this email already exists")
            update_fields["email"] = email

        if "password" in update_fields:
            update_fields["hashed_password"] = get_password_hash(update_fields.pop("password"))

        if not update_fields:
            return UserResponse.model_validate(user)

        updated = await self.user_repo.update(user.id, **update_fields)
        await self.session.commit()
        return UserResponse.model_validate(updated)

    async def delete_user(self, user_id: UUID) -> None:
        """Delete a user."""
        user = await self.get_user_model(user_id)
        await self.user_repo.delete(user.id)
        await self.session.commit()
        logger.info("User deleted", extra={"user_id": str(user.id)})
