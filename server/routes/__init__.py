"""Router aggregation."""

from __future__ import annotations

from fastapi import APIRouter

from linehook.routers import health as health_router_module
from linehook.routers import webhook as webhook_router_module

# Create aggregated router
api_router = APIRouter(prefix="/api/v1")

# Include routers
api_router.include_router(health_router_module.router)
api_router.include_router(webhook_router_module.router)

__all__ = ["api_router"]
