"""
Exchange calculation schemas.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID

MAX_AMOUNT = 10**15


class ExchangeCalculationRequest(BaseModel):
    """Request to convert an amount between two currencies."""
    from_currency_id: UUID = Field(..., description="Source currency ID")
    to_currency_id: UUID = Field(..., description="Target currency ID")
    amount: float = Field(
        ..., ge=0, le=MAX_AMOUNT, allow_inf_nan=False,
        description="Amount to exchange in source currency",
    )


class ExchangeCalculationResponse(BaseModel):
    """Result of an exchange calculation."""
    from_currency_id: UUID
    from_currency_code: str
    to_currency_id: UUID
    to_currency_code: str
    from_amount: float
    to_amount: float = Field(..., description="Calculated amount in target currency, 6 decimals")
    exchange_rate: float = Field(..., description="Rate used for the conversion, 6 decimals")
    calculated_at: datetime
