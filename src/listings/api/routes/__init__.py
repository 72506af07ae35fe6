"""API routes package.

Routers are organized by domain:

- health: Health check endpoint
- auth: Sign-up, login, password reset, session
- wizard: Listing wizard sessions
- properties: Owner dashboard

All routers are registered in main.py with /api prefix.
"""

from listings.api.routes.auth import router as auth_router
from listings.api.routes.health import router as health_router
from listings.api.routes.properties import router as properties_router
from listings.api.routes.wizard import router as wizard_router

__all__ = [
    "auth_router",
    "health_router",
    "properties_router",
    "wizard_router",
]
