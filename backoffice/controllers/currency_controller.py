"""
Currency controller.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.controllers.base_controller import BaseController
from backoffice.services.currency_service import CurrencyService
from backoffice.schemas.currency import CurrencyCreate, CurrencyUpdate, CurrencyResponse


class CurrencyController(BaseController):
    """Controller for currency operations."""

    def __init__(self, session: AsyncSession):
        self.currency_service = CurrencyService(session)

    async def create_currency(self, currency_data: CurrencyCreate) -> CurrencyResponse:
        """Create a new currency."""
        return await self.currency_service.create_currency(currency_data)

    async def list_currencies(self, active_only: bool = False) -> List[CurrencyResponse]:
        """List currencies, optionally only active ones."""
        return await self.currency_service.list_currencies(active_only=active_only)

    async def get_currency(self, currency_id: UUID) -> CurrencyResponse:
        """Get currency by ID."""
        return await self.currency_service.get_currency(currency_id)

    async def update_currency(self, currency_id: UUID, currency_data: CurrencyUpdate) -> CurrencyResponse:
        """Update a currency."""
        return await self.currency_service.update_currency(currency_id, currency_data)

    async def delete_currency(self, currency_id: UUID) -> None:
        """Delete a currency and its exchange rate."""
        await self.currency_service.delete_currency(currency_id)
