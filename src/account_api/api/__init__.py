"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Learn: Gates are attached per route inside each router, not at the
include_router level: the static token gate on the public routes is
switched by settings, and profile routes need the resolved User as a
handler argument.
"""

from fastapi import APIRouter

from account_api.api.auth import router as auth_router
from account_api.api.health import router as health_router
from account_api.api.profile import router as profile_router

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(profile_router, tags=["profile"])
