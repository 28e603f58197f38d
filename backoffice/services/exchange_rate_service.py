"""
Exchange rate service: the rate ledger.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.exceptions import DuplicateRateError, NotFoundError
from backoffice.core.logging import get_logger
from backoffice.db.repositories.exchange_rate_repository import ExchangeRateRepository
from backoffice.models.currency import Currency
from backoffice.models.exchange_rate import ExchangeRate
from backoffice.schemas.exchange_rate import (
    ExchangeRateCreate,
    ExchangeRateUpdate,
    ExchangeRateResponse,
)
from backoffice.services.base_service import BaseService
from backoffice.services.currency_service import CurrencyService
from backoffice.utils.currency_converter import (
    REFERENCE_RATE,
    enforce_reference_rate,
    is_reference_currency,
    synthetic_reference_rate,
)

logger = get_logger(__name__)


class ExchangeRateService(BaseService):
    """Service for exchange rate operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.exchange_rate_repo = ExchangeRateRepository(session)
        self.currency_service = CurrencyService(session)

    async def _get_rate_model(self, exchange_rate_id: UUID) -> ExchangeRate:
        rate = await self.exchange_rate_repo.get(exchange_rate_id)
        if not rate:
            raise NotFoundError(f"Exchange rate with ID {exchange_rate_id} not found")
        return rate

    async def create_exchange_rate(
        self,
        rate_data: ExchangeRateCreate,
        created_by: Optional[UUID] = None,
    ) -> ExchangeRateResponse:
        """Create the rate of a currency. Only one rate may exist per currency."""
        currency = await self.currency_service.get_currency_model(rate_data.currency_id)
        rate_to_usd = enforce_reference_rate(currency, rate_data.rate_to_usd)

        existing = await self.exchange_rate_repo.get_by_currency_id(currency.id)
        if existing:
            raise DuplicateRateError(
                f"Exchange rate for currency {currency.code} already exists. Use update instead."
            )

        rate = await self.exchange_rate_repo.create(
            currency_id=currency.id,
            rate_to_usd=rate_to_usd,
            is_active=rate_data.is_active,
            created_by=created_by,
        )
        await self.session.commit()
        logger.info(
            "Exchange rate created",
            extra={"currency_id": str(currency.id), "code": currency.code, "rate_to_usd": str(rate_to_usd)},
        )
        return ExchangeRateResponse.model_validate(rate)

    async def list_exchange_rates(self, active_only: bool = False) -> List[ExchangeRateResponse]:
        """List exchange rates ordered by currency id."""
        rates = await self.exchange_rate_repo.list_ordered(active_only=active_only)
        return [ExchangeRateResponse.model_validate(r) for r in rates]

    async def get_exchange_rate(self, exchange_rate_id: UUID) -> ExchangeRateResponse:
        """Get exchange rate by ID."""
        rate = await self._get_rate_model(exchange_rate_id)
        return ExchangeRateResponse.model_validate(rate)

    async def get_active_rate_for_currency(self, currency: Currency) -> ExchangeRateResponse:
        """
        Resolve the rate a conversion may use for an already-loaded currency.

        The reference currency always resolves to its virtual 1.0 record; any other
        currency needs a stored, active rate.
        """
        if is_reference_currency(currency):
            return synthetic_reference_rate(currency)

        rate = await self.exchange_rate_repo.get_by_currency_id(currency.id, active_only=True)
        if not rate:
            raise NotFoundError(
                f"Active exchange rate for currency {currency.code} not found. "
                "Please create an exchange rate for this currency."
            )
        return ExchangeRateResponse.model_validate(rate)

    async def get_active_by_currency(self, currency_id: UUID) -> ExchangeRateResponse:
        """Get the active rate of a currency by currency ID."""
        currency = await self.currency_service.get_currency_model(currency_id)
        return await self.get_active_rate_for_currency(currency)

    def _patch_fields(self, currency: Currency, rate_data: ExchangeRateUpdate) -> dict:
        update_fields = rate_data.model_dump(exclude_unset=True, exclude_none=True)
        if "rate_to_usd" in update_fields:
            update_fields["rate_to_usd"] = enforce_reference_rate(currency, update_fields["rate_to_usd"])
        return update_fields

    async def update_exchange_rate(
        self,
        exchange_rate_id: UUID,
        rate_data: ExchangeRateUpdate,
    ) -> ExchangeRateResponse:
        """Update a rate by its ID."""
        rate = await self._get_rate_model(exchange_rate_id)
        currency = await self.currency_service.get_currency_model(rate.currency_id)
        update_fields = self._patch_fields(currency, rate_data)

        if update_fields:
            rate = await self.exchange_rate_repo.update(rate.id, **update_fields)
            await self.session.commit()
        return ExchangeRateResponse.model_validate(rate)

    async def update_exchange_rate_by_currency(
        self,
        currency_id: UUID,
        rate_data: ExchangeRateUpdate,
    ) -> ExchangeRateResponse:
        """
        Update the rate of a currency.

        The reference currency may only have a virtual rate; in that case a stored
        1.0 row is created from the patch.
        """
        currency = await self.currency_service.get_currency_model(currency_id)
        update_fields = self._patch_fields(currency, rate_data)

        rate = await self.exchange_rate_repo.get_by_currency_id(currency.id)
        if not rate:
            if not is_reference_currency(currency):
                raise NotFoundError(f"Exchange rate for currency {currency.code} not found")

            rate = await self.exchange_rate_repo.create(
                currency_id=currency.id,
                rate_to_usd=REFERENCE_RATE,
                is_active=update_fields.get("is_active", True),
            )
            await self.session.commit()
            logger.info("Reference rate provisioned", extra={"currency_id": str(currency.id)})
            return ExchangeRateResponse.model_validate(rate)

        if update_fields:
            rate = await self.exchange_rate_repo.update(rate.id, **update_fields)
            await self.session.commit()
        return ExchangeRateResponse.model_validate(rate)

    async def delete_exchange_rate(self, exchange_rate_id: UUID) -> None:
        """Delete a rate."""
        rate = await self._get_rate_model(exchange_rate_id)
        await self.exchange_rate_repo.delete(rate.id)
        await self.session.commit()
        logger.info("Exchange rate deleted", extra={"exchange_rate_id": str(rate.id)})
