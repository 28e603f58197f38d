"""
Currency Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from uuid import UUID


class CurrencyBase(BaseModel):
    """Base schema for a currency."""
    name: str = Field(..., min_length=1, max_length=100, description="Currency name (e.g., US Dollar)")
    symbol: str = Field(..., min_length=1, max_length=10, description="Currency symbol (e.g., $)")
    is_active: bool = True


class CurrencyCreate(CurrencyBase):
    """Create schema for a currency."""
    code: str = Field(..., min_length=1, max_length=10, description="ISO 4217 currency code (e.g., USD, EUR)")


class CurrencyUpdate(BaseModel):
    """Update schema for a currency. The code is immutable."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    symbol: Optional[str] = Field(None, min_length=1, max_length=10)
    is_active: Optional[bool] = None


class CurrencyResponse(CurrencyBase):
    """Response schema for a currency."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    created_at: datetime
    updated_at: datetime
