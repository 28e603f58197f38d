"""
User API endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from backoffice.api.v1.middleware import require_admin, require_authentication
from backoffice.db.session import get_db
from backoffice.controllers.user_controller import UserController
from backoffice.models.user import User
from backoffice.schemas.user import UserCreate, UserUpdate, UserResponse

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Register a new user."""
    controller = UserController(db)
    return await controller.create_user(user_data)


@router.get("", response_model=List[UserResponse])
async def list_users(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> List[UserResponse]:
    """List all users."""
    controller = UserController(db)
    return await controller.list_users()


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: User = Depends(require_authentication),
) -> UserResponse:
    """Get the currently logged-in user."""
    return UserResponse.model_validate(current_user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_authentication),
) -> UserResponse:
    """Get a user by ID."""
    controller = UserController(db)
    return await controller.get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    user_data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_authentication),
) -> UserResponse:
    """Update a user. Non-admins can only update themselves."""
    controller = UserController(db)
    return await controller.update_user(user_id, user_data, current_user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> None:
    """Delete a user."""
    controller = UserController(db)
    await controller.delete_user(user_id)
