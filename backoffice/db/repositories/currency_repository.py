"""
Currency repository for database operations.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from backoffice.core.exceptions import DuplicateCurrencyError
from backoffice.db.repositories.base_repository import BaseRepository
from backoffice.models.currency import Currency


class CurrencyRepository(BaseRepository[Currency]):
    """Repository for currency operations."""

    duplicate_error = DuplicateCurrencyError
    duplicate_message = "Currency with this code already exists"

    def __init__(self, session: AsyncSession):
        super().__init__(Currency, session)

    async def get_by_code(self, code: str) -> Optional[Currency]:
        """Get currency by its (already normalized) code."""
        async with self._storage_errors():
            result = await self.session.execute(
                select(Currency).where(Currency.code == code)
            )
            return result.scalar_one_or_none()

    async def list_ordered(self, active_only: bool = False) -> List[Currency]:
        """List currencies ordered by code."""
        query = select(Currency)
        if active_only:
            query = query.where(Currency.is_active.is_(True))
        query = query.order_by(Currency.code.asc())

        async with self._storage_errors():
            result = await self.session.execute(query)
            return list(result.scalars().all())
