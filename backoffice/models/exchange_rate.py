"""
Exchange rate model: one rate to USD per currency.
"""

from sqlalchemy import Column, Numeric, Boolean, Uuid
import uuid

from backoffice.db.base import Base, TimestampMixin


class ExchangeRate(TimestampMixin, Base):
    """
    Exchange rate of a currency to the reference currency.

    1 unit of the currency equals ``rate_to_usd`` USD. The currency is referenced by id
    only; the registry lookup is the enforcement point, the unique index on
    ``currency_id`` keeps one rate per currency.
    """

    __tablename__ = "exchange_rates"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    currency_id = Column(Uuid(as_uuid=True), nullable=False, unique=True, index=True)
    rate_to_usd = Column(Numeric(18, 6), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_by = Column(Uuid(as_uuid=True), nullable=True)

    def __repr__(self):
        return f"<ExchangeRate(currency_id={self.currency_id}, rate_to_usd={self.rate_to_usd})>"
