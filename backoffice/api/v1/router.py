"""
API v1 router that aggregates all endpoint routers.
Authentication is enforced per route through the middleware dependencies,
since the exchange and users routers mix public and protected endpoints.
"""

from fastapi import APIRouter

from backoffice.api.v1.endpoints import (
    health,
    auth,
    users,
    exchange,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/users", tags=["authentication"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(exchange.router, prefix="/exchange", tags=["exchange"])
