"""Main API router — combines all endpoint routers."""

from fastapi import APIRouter

from solidify.api.health import router as health_router
from solidify.api.scans import router as scans_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Scans
api_router.include_router(scans_router, tags=["Scans"])
