import inspect
from typing import Any

import anyio
import pytest

from linkauth.auth.client import AuthClient
from linkauth.auth.models import (
    AccountInfoRequest,
    BackendRequest,
    Credentials,
    SendSignInLinkRequest,
    SignInLinkRequest,
)
from linkauth.core.settings import Settings

API_KEY = "FAKE_API_KEY"


def pytest_configure(config: pytest.Config) -> None:
    # Tests use @pytest.mark.asyncio, but we intentionally rely on anyio.
    config.addinivalue_line(
        "markers",
        "asyncio: run async tests using anyio (project-local hook)",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run @pytest.mark.asyncio tests with anyio.

    This avoids adding an external pytest-asyncio dependency.
    """
    if pyfuncitem.get_closest_marker("asyncio") is None:
        return None

    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None

    funcargs = {
        name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
    }

    async def _run_async_test() -> None:
        await test_func(**funcargs)

    anyio.run(_run_async_test)
    return True


class MockAuthBackend:
    """In-memory AuthBackend returning canned Identity Toolkit payloads.

    Every request is recorded; ``errors`` maps a request type to the
    exception raised instead of replying.
    """

    def __init__(self, api_key: str = API_KEY):
        self.api_key = api_key
        self.sign_in_payload: dict[str, Any] = {
            "kind": "identitytoolkit#EmailLinkSigninResponse",
            "idToken": "ACCESS_TOKEN",
            "refreshToken": "REFRESH_TOKEN",
            "expiresIn": "3600",
            "localId": "LOCAL_ID",
            "email": "johnnyappleseed@apple.com",
            "isNewUser": False,
        }
        self.account_info_payload: dict[str, Any] = {
            "kind": "identitytoolkit#GetAccountInfoResponse",
            "users": [
                {
                    "localId": "LOCAL_ID",
                    "email": "johnnyappleseed@apple.com",
                    "displayName": "Johnny Appleseed",
                    "emailVerified": True,
                }
            ],
        }
        self.oob_payload: dict[str, Any] = {
            "kind": "identitytoolkit#GetOobConfirmationCodeResponse",
            "email": "johnnyappleseed@apple.com",
        }
        self.errors: dict[type, Exception] = {}
        self.requests: list[BackendRequest] = []

    async def send(self, request: BackendRequest) -> dict[str, Any]:
        assert request.api_key == self.api_key
        self.requests.append(request)

        error = self.errors.get(type(request))
        if error is not None:
            raise error

        if isinstance(request, SignInLinkRequest):
            return dict(self.sign_in_payload)
        if isinstance(request, AccountInfoRequest):
            return dict(self.account_info_payload)
        if isinstance(request, SendSignInLinkRequest):
            return dict(self.oob_payload)
        raise AssertionError(f"Unexpected request: {request!r}")


@pytest.fixture(name="credentials")
def credentials_fixture() -> Credentials:
    return Credentials(api_key=API_KEY)


@pytest.fixture(name="mock_backend")
def mock_backend_fixture() -> MockAuthBackend:
    """Create a mock backend that succeeds for every request."""
    return MockAuthBackend()


@pytest.fixture(name="auth_client")
def auth_client_fixture(
    credentials: Credentials, mock_backend: MockAuthBackend
) -> AuthClient:
    return AuthClient(credentials, mock_backend)


@pytest.fixture(name="mock_settings")
def mock_settings_fixture() -> Settings:
    """Create mock settings."""
    return Settings(
        env_name="test",
        firebase_api_key=API_KEY,
        identity_toolkit_base_url="https://identitytoolkit.googleapis.com",
    )
