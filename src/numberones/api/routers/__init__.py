"""API routers. `api_router` is mounted under /api in main.py."""

from fastapi import APIRouter

from numberones.api.routers import health, number_ones

api_router = APIRouter()
api_router.include_router(number_ones.router)

__all__ = ["api_router", "health", "number_ones"]
