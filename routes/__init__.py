"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.analytics import router as analytics_router
from routes.map import router as map_router
from routes.autofill import router as autofill_router

__all__ = [
    "analytics_router",
    "map_router",
    "autofill_router",
]
