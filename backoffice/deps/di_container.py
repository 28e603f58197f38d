"""
Dependency injection container using dependency-injector.
Wires the clock and the health check services.
"""

from dependency_injector import containers, providers

from backoffice.db.session import get_session_maker
from backoffice.services.exchange_service import utc_now
from backoffice.services.health_service import HealthService
from backoffice.controllers.health_controller import HealthController


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    config = providers.Configuration()

    # Time source for calculation timestamps
    clock = providers.Object(utc_now)

    # Services
    health_service = providers.Singleton(
        HealthService,
        session_maker_factory=providers.Object(get_session_maker),
    )

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )


# Global container instance
_container: Container = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def set_container(container: Container) -> None:
    """Install the container built at application startup."""
    global _container
    _container = container
