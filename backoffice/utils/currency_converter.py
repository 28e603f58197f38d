"""
Reference-currency rules and conversion arithmetic.

All rates are expressed against the reference currency (USD):
1 unit of a currency = rate_to_usd USD, so USD itself always has rate 1.0.
Every create, update and lookup path goes through the helpers below.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, localcontext
from typing import Optional, Tuple

from backoffice.core.exceptions import InvalidRateError, InvalidRequestError
from backoffice.schemas.exchange_rate import MAX_RATE_TO_USD, ExchangeRateResponse

REFERENCE_CURRENCY_CODE = "USD"
REFERENCE_RATE = Decimal("1")

# Rates are persisted as NUMERIC(18, 6)
RATE_QUANTUM = Decimal("0.000001")

# Enough significant digits for the largest amount times the widest rate spread
CONVERSION_PRECISION = 60


def normalize_currency_code(code: str) -> str:
    """Normalize a currency code for storage and lookup."""
    return code.strip().upper()


def is_reference_currency(currency) -> bool:
    """Return True if the currency is the reference currency."""
    return normalize_currency_code(currency.code) == REFERENCE_CURRENCY_CODE


def to_decimal(value) -> Decimal:
    """Convert a float/int/str/Decimal to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise InvalidRateError(f"Invalid numeric value: {value!r}") from e


def round_amount(value: Decimal) -> Decimal:
    """Round to 6 fractional digits, half away from zero."""
    return value.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)


def enforce_reference_rate(currency, rate_to_usd) -> Optional[Decimal]:
    """
    Apply the reference-currency pin to a requested rate.

    Returns the value to persist (None when no rate was requested). The reference
    currency only accepts exactly 1.0; anything else raises InvalidRateError.
    """
    if rate_to_usd is None:
        return None

    rate = to_decimal(rate_to_usd)
    if not rate.is_finite():
        raise InvalidRateError("Exchange rate must be a finite number")
    if rate < 0:
        raise InvalidRateError("Exchange rate cannot be negative")
    if rate >= MAX_RATE_TO_USD:
        raise InvalidRateError(f"Exchange rate must be lower than {MAX_RATE_TO_USD}")

    if is_reference_currency(currency):
        if rate != REFERENCE_RATE:
            raise InvalidRateError(
                f"{REFERENCE_CURRENCY_CODE} always has rate_to_usd = 1.0. Cannot set a different rate."
            )
        return REFERENCE_RATE

    return rate


def synthetic_reference_rate(currency) -> ExchangeRateResponse:
    """
    Build the virtual rate record of the reference currency.

    The currency id doubles as the record id; timestamps come from the currency.
    """
    return ExchangeRateResponse(
        id=currency.id,
        currency_id=currency.id,
        rate_to_usd=float(REFERENCE_RATE),
        is_active=True,
        created_by=None,
        created_at=currency.created_at,
        updated_at=currency.updated_at,
    )


def convert_amount(amount, from_rate_to_usd, to_rate_to_usd) -> Tuple[Decimal, Decimal]:
    """
    Convert an amount through the reference currency.

    Formula: amount * (from_rate / to_rate), i.e. currency A -> USD -> currency B.

    Returns:
        (exchange_rate, to_amount), both rounded to 6 decimals. The converted amount
        is computed from the unrounded rate.

    Raises:
        InvalidRateError: if the target rate is zero
        InvalidRequestError: if the amount is not finite or the result cannot be represented
    """
    from_rate = to_decimal(from_rate_to_usd)
    to_rate = to_decimal(to_rate_to_usd)
    value = to_decimal(amount)
    if not value.is_finite():
        raise InvalidRequestError("Amount must be a finite number")
    if to_rate == 0:
        raise InvalidRateError("Target currency has a zero exchange rate")

    try:
        with localcontext() as ctx:
            ctx.prec = CONVERSION_PRECISION
            rate = from_rate / to_rate
            to_amount = value * rate
            return round_amount(rate), round_amount(to_amount)
    except InvalidOperation as e:
        raise InvalidRequestError("Amount is too large to convert") from e
