"""
Health service.
Provides health check functionality.
"""

import time
from typing import Callable, Optional
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError

from backoffice.db.repositories.health_repository import HealthRepository
from backoffice.db.session import get_session_maker
from backoffice.schemas.health import HealthResponse


class HealthService:
    """Service for health check operations."""

    def __init__(
        self,
        session_maker_factory: Optional[Callable[[], async_sessionmaker[AsyncSession]]] = None,
    ):
        self.start_time = time.time()
        self.session_maker_factory = session_maker_factory or get_session_maker

    async def get_health(self) -> HealthResponse:
        """
        Get system health status.

        Returns:
            HealthResponse with status, uptime, and checks
        """
        uptime_seconds = int(time.time() - self.start_time)
        uptime_str = f"PT{uptime_seconds}S"  # ISO 8601 duration format

        checks = {}
        try:
            async with self.session_maker_factory()() as session:
                repo = HealthRepository(session=session)
                db_ok = await repo.check_database()
                checks["database"] = "ok" if db_ok else "error"
                if db_ok:
                    has_reference = await repo.reference_currency_exists()
                    checks["reference_currency"] = "ok" if has_reference else "missing"
        except (SQLAlchemyError, OSError) as e:
            checks["database"] = f"error: {str(e)}"

        status = "ok" if all(check == "ok" for check in checks.values()) else "degraded"

        return HealthResponse(
            status=status,
            uptime=uptime_str,
            checks=checks,
        )
