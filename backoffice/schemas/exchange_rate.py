"""
Exchange rate Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

# Upper bound of a NUMERIC(18, 6) column
MAX_RATE_TO_USD = 10**12


class ExchangeRateCreate(BaseModel):
    """Create schema for an exchange rate."""
    currency_id: UUID = Field(..., description="Currency to set the rate for")
    rate_to_usd: float = Field(
        ..., ge=0, lt=MAX_RATE_TO_USD, allow_inf_nan=False,
        description="1 unit of this currency = rate_to_usd USD",
    )
    is_active: bool = True


class ExchangeRateUpdate(BaseModel):
    """Update schema for an exchange rate (all fields optional)."""
    rate_to_usd: Optional[float] = Field(
        None, ge=0, lt=MAX_RATE_TO_USD, allow_inf_nan=False,
        description="1 unit of this currency = rate_to_usd USD",
    )
    is_active: Optional[bool] = None


class ExchangeRateResponse(BaseModel):
    """Response schema for an exchange rate."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    currency_id: UUID
    rate_to_usd: float
    is_active: bool
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime
