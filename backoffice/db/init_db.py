"""
Database initialization and bootstrapping.
Table creation for development and the optional bootstrap admin account.
"""

from backoffice.db.base import Base
from backoffice.db import session as db_session
from backoffice.core.config import settings
from backoffice.core.logging import get_logger

logger = get_logger(__name__)


async def create_tables() -> None:
    """
    Create all database tables.
    Intended for development; production schemas are managed outside the service.
    """
    # Register every model with Base.metadata
    import backoffice.models  # noqa: F401

    async with db_session.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables created")


async def seed_initial_data() -> None:
    """
    Create the bootstrap admin account if FIRST_ADMIN_EMAIL / FIRST_ADMIN_PASSWORD are set
    and no user with that email exists yet.
    """
    if not settings.FIRST_ADMIN_EMAIL or not settings.FIRST_ADMIN_PASSWORD:
        logger.info("Bootstrap admin not configured, skipping seeding")
        return

    from backoffice.db.repositories.user_repository import UserRepository
    from backoffice.core.security import get_password_hash
    from backoffice.models.user import UserRole

    session_maker = db_session.get_session_maker()
    async with session_maker() as session:
        user_repo = UserRepository(session)
        email = settings.FIRST_ADMIN_EMAIL.lower()
        if await user_repo.get_by_email(email):
            logger.info("Bootstrap admin already exists", extra={"email": email})
            return

        await user_repo.create(
            first_name="Admin",
            last_name="User",
            email=email,
            hashed_password=get_password_hash(settings.FIRST_ADMIN_PASSWORD),
            role=UserRole.ADMIN,
        )
        await session.commit()
        logger.info("Bootstrap admin created", extra={"email": email})
