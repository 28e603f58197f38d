"""
Currency service: the currency registry.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.exceptions import DuplicateCurrencyError, NotFoundError
from backoffice.core.logging import get_logger
from backoffice.db.repositories.currency_repository import CurrencyRepository
from backoffice.db.repositories.exchange_rate_repository import ExchangeRateRepository
from backoffice.models.currency import Currency
from backoffice.schemas.currency import CurrencyCreate, CurrencyUpdate, CurrencyResponse
from backoffice.services.base_service import BaseService
from backoffice.utils.currency_converter import (
    REFERENCE_RATE,
    is_reference_currency,
    normalize_currency_code,
)

logger = get_logger(__name__)


class CurrencyService(BaseService):
    """Service for currency operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.currency_repo = CurrencyRepository(session)
        self.exchange_rate_repo = ExchangeRateRepository(session)

    async def get_currency_model(self, currency_id: UUID) -> Currency:
        """Resolve a currency by ID or raise NotFoundError."""
        currency = await self.currency_repo.get(currency_id)
        if not currency:
            raise NotFoundError(f"Currency with ID {currency_id} not found")
        return currency

    async def create_currency(self, currency_data: CurrencyCreate) -> CurrencyResponse:
        """
        Register a new currency.

        Creating the reference currency also provisions its 1.0 rate if none exists.
        """
        code = normalize_currency_code(currency_data.code)

        existing = await self.currency_repo.get_by_code(code)
        if existing:
            raise DuplicateCurrencyError(f"Currency with code {code} already exists")

        currency = await self.currency_repo.create(
            code=code,
            name=currency_data.name,
            symbol=currency_data.symbol,
            is_active=currency_data.is_active,
        )

        if is_reference_currency(currency):
            await self._provision_reference_rate(currency)

        await self.session.commit()
        logger.info("Currency created", extra={"currency_id": str(currency.id), "code": code})
        return CurrencyResponse.model_validate(currency)

    async def _provision_reference_rate(self, currency: Currency) -> None:
        """Store the 1.0 rate of the reference currency unless one already exists."""
        existing_rate = await self.exchange_rate_repo.get_by_currency_id(currency.id)
        if existing_rate:
            return

        await self.exchange_rate_repo.create(
            currency_id=currency.id,
            rate_to_usd=REFERENCE_RATE,
            is_active=True,
        )
        logger.info("Reference rate provisioned", extra={"currency_id": str(currency.id)})

    async def list_currencies(self, active_only: bool = False) -> List[CurrencyResponse]:
        """List currencies ordered by code."""
        currencies = await self.currency_repo.list_ordered(active_only=active_only)
        return [CurrencyResponse.model_validate(c) for c in currencies]

    async def get_currency(self, currency_id: UUID) -> CurrencyResponse:
        """Get currency by ID."""
        currency = await self.get_currency_model(currency_id)
        return CurrencyResponse.model_validate(currency)

    async def get_currency_by_code(self, code: str) -> CurrencyResponse:
        """Get currency by code, case-insensitive."""
        normalized = normalize_currency_code(code)
        currency = await self.currency_repo.get_by_code(normalized)
        if not currency:
            raise NotFoundError(f"Currency with code {normalized} not found")
        return CurrencyResponse.model_validate(currency)

    async def update_currency(
        self,
        currency_id: UUID,
        currency_data: CurrencyUpdate,
    ) -> CurrencyResponse:
        """Partially update name, symbol and/or active flag."""
        currency = await self.get_currency_model(currency_id)

        update_fields = currency_data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_fields:
            return CurrencyResponse.model_validate(currency)

        updated = await self.currency_repo.update(currency.id, **update_fields)
        await self.session.commit()
        return CurrencyResponse.model_validate(updated)

    async def delete_currency(self, currency_id: UUID) -> None:
        """Delete a currency together with its exchange rate."""
        currency = await self.get_currency_model(currency_id)

        # Rate goes first so a failure never leaves an orphaned rate behind
        exchange_rate = await self.exchange_rate_repo.get_by_currency_id(currency.id)
        if exchange_rate:
            await self.exchange_rate_repo.delete(exchange_rate.id)

        await self.currency_repo.delete(currency.id)
        await self.session.commit()
        logger.info("Currency deleted", extra={"currency_id": str(currency.id), "code": currency.code})
