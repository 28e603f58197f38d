"""
Exchange API endpoints: currencies, exchange rates and calculation.
Listing active currencies, reading a currency and calculating are public;
everything else requires an administrator.
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from backoffice.api.v1.middleware import require_admin
from backoffice.db.session import get_db
from backoffice.deps.di_container import get_container
from backoffice.controllers.currency_controller import CurrencyController
from backoffice.controllers.exchange_controller import ExchangeController
from backoffice.controllers.exchange_rate_controller import ExchangeRateController
from backoffice.models.user import User
from backoffice.schemas.currency import CurrencyCreate, CurrencyUpdate, CurrencyResponse
from backoffice.schemas.exchange import ExchangeCalculationRequest, ExchangeCalculationResponse
from backoffice.schemas.exchange_rate import (
    ExchangeRateCreate,
    ExchangeRateUpdate,
    ExchangeRateResponse,
)

router = APIRouter()


# Public endpoints

@router.get("/currencies", response_model=List[CurrencyResponse])
async def list_active_currencies(
    db: AsyncSession = Depends(get_db),
) -> List[CurrencyResponse]:
    """List active currencies ordered by code."""
    controller = CurrencyController(db)
    return await controller.list_currencies(active_only=True)


@router.get("/currencies/{currency_id}", response_model=CurrencyResponse)
async def get_currency(
    currency_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> CurrencyResponse:
    """Get currency by ID."""
    controller = CurrencyController(db)
    return await controller.get_currency(currency_id)


@router.post("/calculate", response_model=ExchangeCalculationResponse)
async def calculate_exchange(
    calculation: ExchangeCalculationRequest,
    db: AsyncSession = Depends(get_db),
) -> ExchangeCalculationResponse:
    """Convert an amount from one currency to another."""
    controller = ExchangeController(db, clock=get_container().clock())
    return await controller.calculate_exchange(calculation)


# Admin endpoints - currency management

@router.post("/currencies", response_model=CurrencyResponse, status_code=status.HTTP_201_CREATED)
async def create_currency(
    currency_data: CurrencyCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> CurrencyResponse:
    """Create a new currency."""
    controller = CurrencyController(db)
    return await controller.create_currency(currency_data)


@router.get("/admin/currencies", response_model=List[CurrencyResponse])
async def list_all_currencies(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> List[CurrencyResponse]:
    """List all currencies including inactive ones."""
    controller = CurrencyController(db)
    return await controller.list_currencies(active_only=False)


@router.patch("/currencies/{currency_id}", response_model=CurrencyResponse)
async def update_currency(
    currency_id: UUID,
    currency_data: CurrencyUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> CurrencyResponse:
    """Update a currency's name, symbol or active flag."""
    controller = CurrencyController(db)
    return await controller.update_currency(currency_id, currency_data)


@router.delete("/currencies/{currency_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_currency(
    currency_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> None:
    """Delete a currency and its exchange rate."""
    controller = CurrencyController(db)
    await controller.delete_currency(currency_id)


# Admin endpoints - exchange rate management

@router.post("/rates", response_model=ExchangeRateResponse, status_code=status.HTTP_201_CREATED)
async def create_exchange_rate(
    rate_data: ExchangeRateCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ExchangeRateResponse:
    """Create the exchange rate of a currency."""
    controller = ExchangeRateController(db)
    return await controller.create_exchange_rate(rate_data, created_by=current_user.id)


@router.get("/admin/rates", response_model=List[ExchangeRateResponse])
async def list_all_exchange_rates(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> List[ExchangeRateResponse]:
    """List all exchange rates including inactive ones."""
    controller = ExchangeRateController(db)
    return await controller.list_exchange_rates(active_only=False)


@router.get("/rates", response_model=List[ExchangeRateResponse])
async def list_active_exchange_rates(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> List[ExchangeRateResponse]:
    """List active exchange rates."""
    controller = ExchangeRateController(db)
    return await controller.list_exchange_rates(active_only=True)


@router.get("/rates/{exchange_rate_id}", response_model=ExchangeRateResponse)
async def get_exchange_rate(
    exchange_rate_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ExchangeRateResponse:
    """Get exchange rate by ID."""
    controller = ExchangeRateController(db)
    return await controller.get_exchange_rate(exchange_rate_id)


@router.patch("/rates/currency/{currency_id}", response_model=ExchangeRateResponse)
async def update_exchange_rate_by_currency(
    currency_id: UUID,
    rate_data: ExchangeRateUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ExchangeRateResponse:
    """Update the exchange rate of a currency."""
    controller = ExchangeRateController(db)
    return await controller.update_exchange_rate_by_currency(currency_id, rate_data)


@router.patch("/rates/{exchange_rate_id}", response_model=ExchangeRateResponse)
async def update_exchange_rate(
    exchange_rate_id: UUID,
    rate_data: ExchangeRateUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ExchangeRateResponse:
    """Update an exchange rate by ID."""
    controller = ExchangeRateController(db)
    return await controller.update_exchange_rate(exchange_rate_id, rate_data)


@router.delete("/rates/{exchange_rate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exchange_rate(
    exchange_rate_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> None:
    """Delete an exchange rate."""
    controller = ExchangeRateController(db)
    await controller.delete_exchange_rate(exchange_rate_id)
