"""
Health repository.
Database checks used by the health check.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError

from backoffice.models.currency import Currency
from backoffice.utils.currency_converter import REFERENCE_CURRENCY_CODE


class HealthRepository:
    """Repository for health check operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def check_database(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            result = await self.session.execute(text("SELECT 1"))
            return result.scalar() == 1
        except SQLAlchemyError:
            return False

    async def reference_currency_exists(self) -> bool:
        """Return True if the reference currency is registered."""
        result = await self.session.execute(
            select(Currency.id).where(Currency.code == REFERENCE_CURRENCY_CODE)
        )
        return result.first() is not None
