"""
Currency model for the exchange catalog.
"""

from sqlalchemy import Column, String, Boolean, Uuid
import uuid

from backoffice.db.base import Base, TimestampMixin


class Currency(TimestampMixin, Base):
    """Currency known to the exchange catalog."""

    __tablename__ = "currencies"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    code = Column(String(10), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    symbol = Column(String(10), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<Currency(code={self.code}, is_active={self.is_active})>"
