"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from backoffice.models.currency import Currency
from backoffice.models.exchange_rate import ExchangeRate
from backoffice.models.user import User, UserRole

__all__ = [
    "Currency",
    "ExchangeRate",
    "User",
    "UserRole",
]
