"""
API routers.

- /users: signup, leaderboard and profile lookup
- /auth: login and token refresh
"""

from pickem.api.routes.auth import router as auth_router
from pickem.api.routes.users import router as users_router

__all__ = ["auth_router", "users_router"]
