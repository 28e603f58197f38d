"""
Exchange calculation service: converts amounts between two catalog currencies.
"""

from datetime import datetime, timezone
from typing import Callable
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.exceptions import InactiveCurrencyError, InvalidRequestError
from backoffice.schemas.exchange import ExchangeCalculationRequest, ExchangeCalculationResponse
from backoffice.services.base_service import BaseService
from backoffice.services.exchange_rate_service import ExchangeRateService
from backoffice.utils.currency_converter import convert_amount


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ExchangeService(BaseService):
    """Service for exchange calculations. Read-only."""

    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = utc_now):
        super().__init__(session)
        self.exchange_rate_service = ExchangeRateService(session)
        self.currency_service = self.exchange_rate_service.currency_service
        self.clock = clock

    async def calculate_exchange(
        self,
        calculation: ExchangeCalculationRequest,
    ) -> ExchangeCalculationResponse:
        """
        Calculate how much of the target currency an amount of the source currency buys.

        Raises:
            InvalidRequestError: source and target are the same currency
            NotFoundError: a currency or its active rate does not exist
            InactiveCurrencyError: a currency is disabled
            InvalidRateError: the target rate is zero
        """
        if calculation.from_currency_id == calculation.to_currency_id:
            raise InvalidRequestError("Source and target currencies cannot be the same")

        from_currency = await self.currency_service.get_currency_model(calculation.from_currency_id)
        to_currency = await self.currency_service.get_currency_model(calculation.to_currency_id)

        inactive = [c.code for c in (from_currency, to_currency) if not c.is_active]
        if inactive:
            raise InactiveCurrencyError(
                f"Inactive currency: {', '.join(inactive)}",
                details={"inactive_currencies": inactive},
            )

        from_rate = await self.exchange_rate_service.get_active_rate_for_currency(from_currency)
        to_rate = await self.exchange_rate_service.get_active_rate_for_currency(to_currency)

        exchange_rate, to_amount = convert_amount(
            calculation.amount,
            from_rate.rate_to_usd,
            to_rate.rate_to_usd,
        )

        return ExchangeCalculationResponse(
            from_currency_id=from_currency.id,
            from_currency_code=from_currency.code,
            to_currency_id=to_currency.id,
            to_currency_code=to_currency.code,
            from_amount=calculation.amount,
            to_amount=float(to_amount),
            exchange_rate=float(exchange_rate),
            calculated_at=self.clock(),
        )
