"""API module for numberones.

Structure:
- routers/: endpoints (number ones lookups, health)
- dependencies.py: dependency injection from app.state
- exception_handlers.py: domain exception -> HTTP status mapping
"""

from numberones.api.routers import api_router

__all__ = ["api_router"]
