"""
Base repository class with common CRUD operations.
Repositories handle database access using async SQLAlchemy sessions and translate
storage failures into application exceptions.
"""

from contextlib import asynccontextmanager
from typing import Generic, TypeVar, Type, Optional, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from backoffice.core.exceptions import AppException, StorageUnavailableError
from backoffice.core.logging import get_logger
from backoffice.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)

logger = get_logger(__name__)


class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations."""

    # Raised when the storage layer rejects a write on a uniqueness constraint
    duplicate_error: Type[AppException] = StorageUnavailableError
    duplicate_message: str = "Record already exists"

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    @asynccontextmanager
    async def _storage_errors(self):
        """Translate SQLAlchemy failures raised inside the block."""
        try:
            yield
        except IntegrityError as e:
            logger.warning(
                "Uniqueness violation",
                extra={"model": self.model.__name__, "error": str(e.orig)},
            )
            raise self.duplicate_error(self.duplicate_message) from e
        except SQLAlchemyError as e:
            logger.error(
                "Storage failure",
                extra={"model": self.model.__name__, "error": str(e)},
            )
            raise StorageUnavailableError("Storage is unavailable") from e

    async def create(self, **kwargs) -> ModelType:
        """
        Create a new record.

        Args:
            **kwargs: Model attributes

        Returns:
            Created model instance
        """
        async with self._storage_errors():
            instance = self.model(**kwargs)
            self.session.add(instance)
            await self.session.flush()
            await self.session.refresh(instance)
            return instance

    async def get(self, id: UUID) -> Optional[ModelType]:
        """
        Get a record by ID.

        Args:
            id: Record ID

        Returns:
            Model instance or None
        """
        async with self._storage_errors():
            result = await self.session.execute(
                select(self.model).where(self.model.id == id)
            )
            return result.scalar_one_or_none()

    async def list(
        self,
        skip: int = 0,
        limit: int = 100,
        **filters,
    ) -> List[ModelType]:
        """
        List records with pagination and filters.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            **filters: Filter criteria

        Returns:
            List of model instances
        """
        query = select(self.model)

        for key, value in filters.items():
            if hasattr(self.model, key):
                query = query.where(getattr(self.model, key) == value)

        query = query.offset(skip).limit(limit)
        async with self._storage_errors():
            result = await self.session.execute(query)
            return list(result.scalars().all())

    async def update(self, id: UUID, **kwargs) -> Optional[ModelType]:
        """
        Update a record.

        Args:
            id: Record ID
            **kwargs: Attributes to update

        Returns:
            Updated model instance or None
        """
        async with self._storage_errors():
            await self.session.execute(
                update(self.model)
                .where(self.model.id == id)
                .values(**kwargs)
            )
            await self.session.flush()
            instance = await self.get(id)
            if instance is not None:
                # Reload server-side values such as updated_at
                await self.session.refresh(instance)
            return instance

    async def delete(self, id: UUID) -> bool:
        """
        Delete a record.

        Args:
            id: Record ID

        Returns:
            True if deleted, False if not found
        """
        async with self._storage_errors():
            result = await self.session.execute(
                delete(self.model).where(self.model.id == id)
            )
            await self.session.flush()
            return result.rowcount > 0
