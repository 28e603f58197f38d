"""
Base service class.
Services contain business logic and coordinate repositories.
"""

from abc import ABC
from sqlalchemy.ext.asyncio import AsyncSession


class BaseService(ABC):
    """Base service class for all services."""

    def __init__(self, session: AsyncSession):
        self.session = session
