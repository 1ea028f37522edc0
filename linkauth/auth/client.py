"""Email-link authentication client.

Public entry point of the library. Credentials and the backend are injected
at construction; there is no global app registry.

    client = AuthClient(Credentials(api_key="..."), IdentityToolkitBackend())
    await client.send_sign_in_link("user@example.com", ActionCodeSettings(...))
    result = await client.sign_in("user@example.com", link_from_email)

Each call owns its in-flight requests; the client holds no mutable state.
"""

import logging
from datetime import timedelta

from linkauth.auth.backend import AuthBackend
from linkauth.auth.identity_toolkit import SendOobCodeResponse
from linkauth.auth.models import (
    ActionCodeSettings,
    AuthDataResult,
    ConfirmationCodeResponse,
    Credentials,
)
from linkauth.auth.requests import (
    build_send_sign_in_link_request,
    is_sign_in_with_email_link,
)
from linkauth.auth.resolver import SessionResolver
from linkauth.auth.responses import (
    ACCESS_TOKEN_TIME_TO_LIVE,
    decode_confirmation_code_response,
)

logger = logging.getLogger(__name__)


class AuthClient:
    """Email-link sign-in operations against an AuthBackend."""

    def __init__(
        self,
        credentials: Credentials,
        backend: AuthBackend,
        *,
        access_token_ttl: timedelta = ACCESS_TOKEN_TIME_TO_LIVE,
    ):
        self.credentials = credentials
        self._backend = backend
        self._access_token_ttl = access_token_ttl

    @staticmethod
    def is_sign_in_with_email_link(link: str) -> bool:
        return is_sign_in_with_email_link(link)

    async def sign_in(self, email: str, link: str) -> AuthDataResult:
        """Sign in with the email address and the link sent to it."""
        resolver = SessionResolver(
            self.credentials,
            self._backend,
            access_token_ttl=self._access_token_ttl,
        )
        return await resolver.resolve(email, link)

    async def send_sign_in_link(
        self, email: str, action_code_settings: ActionCodeSettings
    ) -> None:
        """Ask the backend to email a sign-in link.

        Completes without a payload once the backend acknowledges; the
        oobCode only ever travels inside the emailed link.
        """
        request = build_send_sign_in_link_request(
            email, action_code_settings, self.credentials.api_key
        )
        await self._backend.send(request)
        logger.info("Sign-in link requested")

    async def generate_sign_in_link(
        self, email: str, action_code_settings: ActionCodeSettings
    ) -> ConfirmationCodeResponse:
        """Generate a sign-in link without emailing it.

        Uses ``returnOobLink``, which the backend only honours for privileged
        (service account) callers.
        """
        request = build_send_sign_in_link_request(
            email,
            action_code_settings,
            self.credentials.api_key,
            return_oob_link=True,
        )
        data: SendOobCodeResponse = await self._backend.send(request)
        return decode_confirmation_code_response(data)
