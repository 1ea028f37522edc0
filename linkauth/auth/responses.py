"""Decoders for Identity Toolkit replies.

Each decoder validates the raw JSON payload and returns a typed, immutable
response, or raises MalformedResponseError.
"""

from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from linkauth.auth.exceptions import MalformedResponseError
from linkauth.auth.identity_toolkit import (
    AccountInfoUserPayload,
    GetAccountInfoResponse,
    SendOobCodeResponse,
    SignInWithEmailLinkResponse,
)
from linkauth.auth.models import (
    AccountInfoResponse,
    AccountInfoUser,
    ConfirmationCodeResponse,
    SignInResponse,
)

# Lifetime of Firebase ID tokens; the wire expiresIn is not trusted.
ACCESS_TOKEN_TIME_TO_LIVE = timedelta(hours=1)


def _require_str(payload: Mapping[str, Any], field: str, context: str) -> str:
    value = payload.get(field)
    if not isinstance(value, str) or not value:
        raise MalformedResponseError(f"{context} response is missing {field}")
    return value


def _optional_str(payload: Mapping[str, Any], field: str) -> str | None:
    value = payload.get(field)
    return value if isinstance(value, str) else None


def decode_sign_in_response(
    payload: SignInWithEmailLinkResponse,
    *,
    now: datetime | None = None,
    time_to_live: timedelta = ACCESS_TOKEN_TIME_TO_LIVE,
) -> SignInResponse:
    """Decode a signInWithEmailLink reply.

    Args:
        payload: Raw response JSON
        now: Reference time, defaults to the current UTC time
        time_to_live: Client-side access token lifetime, must be positive

    Raises:
        MalformedResponseError: If idToken or refreshToken is missing
        ValueError: If time_to_live is not positive
    """
    if time_to_live <= timedelta(0):
        raise ValueError("time_to_live must be positive")

    id_token = _require_str(payload, "idToken", "Sign-in")
    refresh_token = _require_str(payload, "refreshToken", "Sign-in")
    issued_at = now if now is not None else datetime.now(UTC)

    return SignInResponse(
        id_token=id_token,
        refresh_token=refresh_token,
        approximate_expiration_date=issued_at + time_to_live,
        local_id=_optional_str(payload, "localId"),
        email=_optional_str(payload, "email"),
        is_new_user=payload.get("isNewUser") is True,
    )


def decode_account_info_response(
    payload: GetAccountInfoResponse,
) -> AccountInfoResponse:
    """Decode a lookup reply, which must contain at least one user."""
    raw_users = payload.get("users")
    if not isinstance(raw_users, list) or not raw_users:
        raise MalformedResponseError("Account info response contains no users")

    users = []
    raw_user: AccountInfoUserPayload
    for raw_user in raw_users:
        if not isinstance(raw_user, Mapping):
            raise MalformedResponseError("Account info user entry is not an object")
        users.append(
            AccountInfoUser(
                local_id=_require_str(raw_user, "localId", "Account info"),
                email=_optional_str(raw_user, "email"),
                display_name=_optional_str(raw_user, "displayName"),
                email_verified=raw_user.get("emailVerified") is True,
            )
        )
    return AccountInfoResponse(users=tuple(users))


def decode_confirmation_code_response(
    payload: SendOobCodeResponse,
) -> ConfirmationCodeResponse:
    return ConfirmationCodeResponse(
        oob_code=_require_str(payload, "oobCode", "Confirmation code"),
        email=_optional_str(payload, "email"),
        oob_link=_optional_str(payload, "oobLink"),
    )
