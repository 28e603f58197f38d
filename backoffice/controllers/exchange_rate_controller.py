"""
Exchange rate controller.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.controllers.base_controller import BaseController
from backoffice.services.exchange_rate_service import ExchangeRateService
from backoffice.schemas.exchange_rate import (
    ExchangeRateCreate,
    ExchangeRateUpdate,
    ExchangeRateResponse,
)


class ExchangeRateController(BaseController):
    """Controller for exchange rate operations."""

    def __init__(self, session: AsyncSession):
        self.exchange_rate_service = ExchangeRateService(session)

    async def create_exchange_rate(
        self,
        rate_data: ExchangeRateCreate,
        created_by: Optional[UUID] = None,
    ) -> ExchangeRateResponse:
        """Create a new exchange rate."""
        return await self.exchange_rate_service.create_exchange_rate(rate_data, created_by=created_by)

    async def list_exchange_rates(self, active_only: bool = False) -> List[ExchangeRateResponse]:
        """List exchange rates, optionally only active ones."""
        return await self.exchange_rate_service.list_exchange_rates(active_only=active_only)

    async def get_exchange_rate(self, exchange_rate_id: UUID) -> ExchangeRateResponse:
        """Get exchange rate by ID."""
        return await self.exchange_rate_service.get_exchange_rate(exchange_rate_id)

    async def update_exchange_rate(
        self,
        exchange_rate_id: UUID,
        rate_data: ExchangeRateUpdate,
    ) -> ExchangeRateResponse:
        """Update an exchange rate by ID."""
        return await self.exchange_rate_service.update_exchange_rate(exchange_rate_id, rate_data)

    async def update_exchange_rate_by_currency(
        self,
        currency_id: UUID,
        rate_data: ExchangeRateUpdate,
    ) -> ExchangeRateResponse:
        """Update an exchange rate by currency ID."""
        return await self.exchange_rate_service.update_exchange_rate_by_currency(currency_id, rate_data)

    async def delete_exchange_rate(self, exchange_rate_id: UUID) -> None:
        """Delete an exchange rate."""
        await self.exchange_rate_service.delete_exchange_rate(exchange_rate_id)
