"""Health domain router.

Health check endpoint for monitoring and load balancers.
"""

from fastapi import APIRouter

from linkauth.core.constants import Routes
from linkauth.core.deps import SettingsDep

router = APIRouter(prefix=Routes.HEALTH.prefix, tags=[Routes.HEALTH.tag])


@router.get("")
async def health(settings: SettingsDep):
    """Liveness check; reports whether the backend API key is configured."""
    return {
        "status": "ok",
        "identity_toolkit": "configured" if settings.firebase_api_key else "missing",
    }
