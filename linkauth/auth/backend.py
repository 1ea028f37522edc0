"""Authentication backend seam.

``AuthBackend`` is the only thing the sign-in flow talks to: it sends one
typed request and resolves once with the raw reply payload, or raises.
``IdentityToolkitBackend`` is the production variant over the Identity
Toolkit REST API; tests supply their own implementation.
"""

import logging
import re
from collections.abc import Callable
from typing import Any, Protocol

import httpx

from linkauth.auth.exceptions import BackendError, MalformedResponseError
from linkauth.auth.identity_toolkit import ErrorResponse
from linkauth.auth.models import BackendRequest, SendSignInLinkRequest
from linkauth.core.http import get_identity_toolkit_client
from linkauth.core.retry import DEFAULT_ATTEMPTS, with_retry

logger = logging.getLogger(__name__)

DEFAULT_IDENTITY_TOOLKIT_BASE_URL = "https://identitytoolkit.googleapis.com"


class AuthBackend(Protocol):
    """Protocol for authentication backends.

    Enables dependency inversion - the flow depends on this protocol,
    not on the HTTP implementation.
    """

    async def send(self, request: BackendRequest) -> dict[str, Any]:
        """Send the request and return the raw response payload."""
        ...


def _requires_admin_token(request: BackendRequest) -> bool:
    """Only returnOobLink needs service account credentials."""
    return isinstance(request, SendSignInLinkRequest) and request.return_oob_link


class IdentityToolkitBackend:
    """AuthBackend over the Identity Toolkit REST API.

    Network failures are retried; backend rejections are not.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_IDENTITY_TOOLKIT_BASE_URL,
        *,
        client: httpx.AsyncClient | None = None,
        attempts: int = DEFAULT_ATTEMPTS,
        access_token_provider: Callable[[], str] | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._client = client
        self._attempts = attempts
        self._access_token_provider = access_token_provider

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return get_identity_toolkit_client()

    async def send(self, request: BackendRequest) -> dict[str, Any]:
        """POST the request payload to its endpoint.

        Raises:
            BackendError: If the backend rejects the request or is unreachable
            MalformedResponseError: If the reply body is not a JSON object
        """
        url = f"{self._base_url}/{request.endpoint}"
        headers = {}
        if self._access_token_provider is not None and _requires_admin_token(request):
            headers["Authorization"] = f"Bearer {self._access_token_provider()}"
        client = self._get_client()

        async def do_request() -> httpx.Response:
            return await client.post(
                url,
                params={"key": request.api_key},
                json=request.to_payload(),
                headers=headers,
            )

        try:
            response = await with_retry(
                do_request,
                attempts=self._attempts,
                exceptions=(httpx.RequestError,),
            )
        except httpx.RequestError as e:
            logger.warning(
                "Identity Toolkit unreachable: endpoint=%s, error=%s",
                request.endpoint,
                type(e).__name__,
                extra={"endpoint": request.endpoint},
            )
            raise BackendError(
                "NETWORK_ERROR", "Authentication backend unavailable"
            ) from e

        if response.status_code != 200:
            self._raise_backend_error(request.endpoint, response)

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError() from e
        if not isinstance(data, dict):
            raise MalformedResponseError()
        return data

    @staticmethod
    def _sanitize_error_code(error_message: str) -> str:
        """Extract the leading error code, e.g. ``INVALID_OOB_CODE : ...``."""
        match = re.match(r"[A-Z0-9_]+", error_message)
        return match.group(0) if match else "UNKNOWN"

    def _raise_backend_error(self, endpoint: str, response: httpx.Response) -> None:
        try:
            error_data: ErrorResponse = response.json()
            error_message = error_data.get("error", {}).get("message")
        except (ValueError, AttributeError):
            error_message = None

        if not isinstance(error_message, str) or not error_message:
            error_message = f"HTTP {response.status_code}"
            error_code = "UNKNOWN"
        else:
            error_code = self._sanitize_error_code(error_message)

        # Only the code is logged; messages may echo user input.
        logger.info(
            "Identity Toolkit error: endpoint=%s, status=%s, code=%s",
            endpoint,
            response.status_code,
            error_code,
            extra={"endpoint": endpoint, "backend_code": error_code},
        )
        raise BackendError(error_code, error_message, http_status=response.status_code)
