"""Session resolver for email-link sign-in.

Drives one sign-in through the backend:

    idle -> awaiting_sign_in -> awaiting_account_info -> resolved
    awaiting_sign_in | awaiting_account_info -> failed

Any builder, decode or backend error moves the resolver to failed and is
re-raised unchanged. Nothing is retried here and no partial session is ever
returned. A resolver handles exactly one sign-in.
"""

import logging
from datetime import timedelta
from enum import Enum

from linkauth.auth.backend import AuthBackend
from linkauth.auth.identity_toolkit import (
    GetAccountInfoResponse,
    SignInWithEmailLinkResponse,
)
from linkauth.auth.models import (
    AccountInfoUser,
    AdditionalUserInfo,
    AuthDataResult,
    Credentials,
    SignInResponse,
    User,
)
from linkauth.auth.requests import (
    build_account_info_request,
    build_sign_in_link_request,
)
from linkauth.auth.responses import (
    ACCESS_TOKEN_TIME_TO_LIVE,
    decode_account_info_response,
    decode_sign_in_response,
)

logger = logging.getLogger(__name__)


class ResolverState(str, Enum):
    """Progress of a single email-link sign-in."""

    idle = "idle"
    awaiting_sign_in = "awaiting_sign_in"
    awaiting_account_info = "awaiting_account_info"
    resolved = "resolved"
    failed = "failed"


class SessionResolver:
    """Single-shot state machine turning an email link into a session."""

    def __init__(
        self,
        credentials: Credentials,
        backend: AuthBackend,
        *,
        access_token_ttl: timedelta = ACCESS_TOKEN_TIME_TO_LIVE,
    ):
        self._credentials = credentials
        self._backend = backend
        self._access_token_ttl = access_token_ttl
        self.state = ResolverState.idle

    def _transition(self, state: ResolverState) -> None:
        logger.debug(
            "Session resolver %s -> %s",
            self.state.value,
            state.value,
            extra={"state": state.value},
        )
        self.state = state

    async def resolve(self, email: str, link: str) -> AuthDataResult:
        """Sign in with an email link and resolve the full session.

        Raises:
            RuntimeError: If this resolver already ran
            MalformedLinkError: If the link carries no oobCode
            MalformedResponseError: If a backend reply lacks required fields
            BackendError: If the backend rejects a request or is unreachable
        """
        if self.state is not ResolverState.idle:
            raise RuntimeError(
                f"Session resolver already used (state={self.state.value})"
            )

        api_key = self._credentials.api_key
        try:
            self._transition(ResolverState.awaiting_sign_in)
            sign_in_request = build_sign_in_link_request(email, link, api_key)
            sign_in_data: SignInWithEmailLinkResponse = await self._backend.send(
                sign_in_request
            )
            sign_in = decode_sign_in_response(
                sign_in_data,
                time_to_live=self._access_token_ttl,
            )

            self._transition(ResolverState.awaiting_account_info)
            account_info_request = build_account_info_request(
                api_key, sign_in.id_token
            )
            account_info_data: GetAccountInfoResponse = await self._backend.send(
                account_info_request
            )
            account_info = decode_account_info_response(account_info_data)
        except Exception as e:
            logger.info(
                "Email link sign-in failed in state %s: %s",
                self.state.value,
                type(e).__name__,
                extra={"state": self.state.value},
            )
            self._transition(ResolverState.failed)
            raise

        result = self._assemble(sign_in, account_info.users[0])
        self._transition(ResolverState.resolved)
        return result

    @staticmethod
    def _assemble(sign_in: SignInResponse, account: AccountInfoUser) -> AuthDataResult:
        user = User(
            local_id=account.local_id,
            email=account.email,
            display_name=account.display_name,
            refresh_token=sign_in.refresh_token,
            id_token=sign_in.id_token,
            approximate_expiration_date=sign_in.approximate_expiration_date,
            email_verified=account.email_verified,
            is_anonymous=False,
        )
        return AuthDataResult(
            user=user,
            additional_user_info=AdditionalUserInfo(is_new_user=sign_in.is_new_user),
        )
