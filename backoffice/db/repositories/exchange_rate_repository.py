"""
Exchange rate repository for database operations.
"""

from typing import Optional, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from backoffice.core.exceptions import DuplicateRateError
from backoffice.db.repositories.base_repository import BaseRepository
from backoffice.models.exchange_rate import ExchangeRate


class ExchangeRateRepository(BaseRepository[ExchangeRate]):
    """Repository for exchange rate operations."""

    duplicate_error = DuplicateRateError
    duplicate_message = "Exchange rate for this currency already exists. Use update instead."

    def __init__(self, session: AsyncSession):
        super().__init__(ExchangeRate, session)

    async def get_by_currency_id(
        self,
        currency_id: UUID,
        active_only: bool = False,
    ) -> Optional[ExchangeRate]:
        """Get the rate stored for a currency, optionally only if active."""
        query = select(ExchangeRate).where(ExchangeRate.currency_id == currency_id)
        if active_only:
            query = query.where(ExchangeRate.is_active.is_(True))

        async with self._storage_errors():
            result = await self.session.execute(query)
            return result.scalar_one_or_none()

    async def list_ordered(self, active_only: bool = False) -> List[ExchangeRate]:
        """List exchange rates ordered by currency id."""
        query = select(ExchangeRate)
        if active_only:
            query = query.where(ExchangeRate.is_active.is_(True))
        query = query.order_by(ExchangeRate.currency_id.asc())

        async with self._storage_errors():
            result = await self.session.execute(query)
            return list(result.scalars().all())
