"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running
and the user store is reachable. Not behind any gate.
"""

from fastapi import APIRouter, Depends

from account_api import __version__
from account_api.auth.dependencies import get_user_store
from account_api.services.user_store import StoreError, UserStore

router = APIRouter()


@router.get("/health")
async def health_check(store: UserStore = Depends(get_user_store)):
    """Check server health and store connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        await store.ping()
        checks["store"] = "ok"
    except StoreError as e:
        checks["store"] = f"error: {e}"

    status = "healthy" if checks["store"] == "ok" else "degraded"
    return {"status": status, **checks}
