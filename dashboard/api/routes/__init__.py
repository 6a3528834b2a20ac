"""API routes package."""

from fastapi import APIRouter

from dashboard.api.routes.dashboard import router as dashboard_router
from dashboard.api.routes.filters import router as filters_router
from dashboard.api.routes.fraud import router as fraud_router
from dashboard.api.routes.health import router as health_router
from dashboard.api.routes.transactions import router as transactions_router

# Create API router with all sub-routers
api_router = APIRouter()

# Register all route modules
api_router.include_router(health_router)
api_router.include_router(dashboard_router)
api_router.include_router(transactions_router)
api_router.include_router(fraud_router)
api_router.include_router(filters_router)


__all__ = [
    "api_router",
    "dashboard_router",
    "filters_router",
    "fraud_router",
    "health_router",
    "transactions_router",
]
