"""
Exchange calculation controller.
"""

from datetime import datetime
from typing import Callable, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.controllers.base_controller import BaseController
from backoffice.services.exchange_service import ExchangeService, utc_now
from backoffice.schemas.exchange import ExchangeCalculationRequest, ExchangeCalculationResponse


class ExchangeController(BaseController):
    """Controller for exchange calculations."""

    def __init__(self, session: AsyncSession, clock: Optional[Callable[[], datetime]] = None):
        self.exchange_service = ExchangeService(session, clock=clock or utc_now)

    async def calculate_exchange(
        self,
        calculation: ExchangeCalculationRequest,
    ) -> ExchangeCalculationResponse:
        """Calculate an exchange between two currencies."""
        return await self.exchange_service.calculate_exchange(calculation)
