"""Email-link sign-in data model.

Requests, decoded backend replies and the resolved session. All objects are
immutable and owned by the call that created them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from linkauth.auth.identity_toolkit import (
    IDENTITY_TOOLKIT_ENDPOINT_PATHS,
    GetAccountInfoRequest,
    SendOobCodeRequest,
    SignInWithEmailLinkRequest,
)

EMAIL_PASSWORD_PROVIDER_ID = "password"
EMAIL_LINK_SIGN_IN_METHOD = "emailLink"


@dataclass(frozen=True)
class Credentials:
    """Identifies the backend project."""

    api_key: str


@dataclass(frozen=True)
class ActionCodeSettings:
    """Continuation parameters for the link sent by email."""

    url: str | None = None
    handle_code_in_app: bool = False


# Requests
@dataclass(frozen=True)
class SignInLinkRequest:
    endpoint: ClassVar[str] = IDENTITY_TOOLKIT_ENDPOINT_PATHS["signInWithEmailLink"]

    email: str
    oob_code: str
    api_key: str

    def to_payload(self) -> SignInWithEmailLinkRequest:
        return {"email": self.email, "oobCode": self.oob_code}


@dataclass(frozen=True)
class SendSignInLinkRequest:
    endpoint: ClassVar[str] = IDENTITY_TOOLKIT_ENDPOINT_PATHS["sendOobCode"]

    email: str
    continue_url: str | None
    handle_code_in_app: bool
    api_key: str
    return_oob_link: bool = False

    def to_payload(self) -> SendOobCodeRequest:
        payload: SendOobCodeRequest = {
            "requestType": "EMAIL_SIGNIN",
            "email": self.email,
            "canHandleCodeInApp": self.handle_code_in_app,
        }
        if self.continue_url is not None:
            payload["continueUrl"] = self.continue_url
        if self.return_oob_link:
            payload["returnOobLink"] = True
        return payload


@dataclass(frozen=True)
class AccountInfoRequest:
    endpoint: ClassVar[str] = IDENTITY_TOOLKIT_ENDPOINT_PATHS["lookup"]

    api_key: str
    access_token: str

    def to_payload(self) -> GetAccountInfoRequest:
        return {"idToken": self.access_token}


BackendRequest = SignInLinkRequest | SendSignInLinkRequest | AccountInfoRequest


# Responses
@dataclass(frozen=True)
class SignInResponse:
    id_token: str
    refresh_token: str
    approximate_expiration_date: datetime
    local_id: str | None = None
    email: str | None = None
    is_new_user: bool = False


@dataclass(frozen=True)
class AccountInfoUser:
    local_id: str
    email: str | None = None
    display_name: str | None = None
    email_verified: bool = False


@dataclass(frozen=True)
class AccountInfoResponse:
    users: tuple[AccountInfoUser, ...]


@dataclass(frozen=True)
class ConfirmationCodeResponse:
    oob_code: str
    email: str | None = None
    oob_link: str | None = None


# Session
@dataclass(frozen=True)
class User:
    """Authenticated user resolved from a successful sign-in."""

    local_id: str
    email: str | None
    display_name: str | None
    refresh_token: str
    id_token: str
    approximate_expiration_date: datetime
    email_verified: bool = False
    is_anonymous: bool = False


@dataclass(frozen=True)
class AdditionalUserInfo:
    provider_id: str = EMAIL_PASSWORD_PROVIDER_ID
    sign_in_method: str = EMAIL_LINK_SIGN_IN_METHOD
    is_new_user: bool = False


@dataclass(frozen=True)
class AuthDataResult:
    """The session handed to the caller after a successful sign-in."""

    user: User
    additional_user_info: AdditionalUserInfo
