"""
User and authentication schemas.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from backoffice.models.user import UserRole


class UserBase(BaseModel):
    """Base user schema with common fields."""
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class UserCreate(UserBase):
    """Schema for registering a user."""
    password: str = Field(..., min_length=6, max_length=72)


class UserUpdate(BaseModel):
    """Schema for updating a user (all fields optional)."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=72)
    role: Optional[UserRole] = Field(None, description="Admin only")


class UserResponse(UserBase):
    """Public view of a user. Never carries the password hash."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    role: UserRole
    created_at: datetime
    updated_at: datetime


class LoginRequest(BaseModel):
    """Email/password login request."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Login response with bearer token and user info."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse
    message: str = "Login successful"
