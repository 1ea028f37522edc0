"""Auth domain dependencies.

Wires Settings into an AuthClient for FastAPI routes.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from linkauth.auth.backend import IdentityToolkitBackend
from linkauth.auth.client import AuthClient
from linkauth.auth.models import Credentials
from linkauth.core.deps import SettingsDep
from linkauth.core.exceptions import InternalError
from linkauth.core.firebase import get_admin_access_token


@lru_cache
def _build_auth_client(
    api_key: str,
    base_url: str,
    attempts: int,
    ttl_seconds: int,
    admin_enabled: bool,
) -> AuthClient:
    backend = IdentityToolkitBackend(
        base_url,
        attempts=attempts,
        access_token_provider=get_admin_access_token if admin_enabled else None,
    )
    return AuthClient(
        Credentials(api_key=api_key),
        backend,
        access_token_ttl=timedelta(seconds=ttl_seconds),
    )


def get_auth_client(settings: SettingsDep) -> AuthClient:
    """Get the AuthClient configured from settings.

    Cached per configuration since the client holds no mutable state.

    Raises:
        InternalError: If FIREBASE_API_KEY is not configured
    """
    if not settings.firebase_api_key:
        raise InternalError("Firebase API key not configured")
    return _build_auth_client(
        settings.firebase_api_key,
        settings.identity_toolkit_base_url,
        settings.identity_toolkit_retry_attempts,
        settings.access_token_ttl_seconds,
        settings.firebase_admin_enabled,
    )


AuthClientDep = Annotated[AuthClient, Depends(get_auth_client)]
