from typing import Literal, NotRequired, TypedDict

# Constants
IDENTITY_TOOLKIT_ENDPOINT_PATHS: dict[str, str] = {
    "signInWithEmailLink": "v1/accounts:signInWithEmailLink",
    "sendOobCode": "v1/accounts:sendOobCode",
    "lookup": "v1/accounts:lookup",
}


# Request schemas
class SignInWithEmailLinkRequest(TypedDict, total=False):
    """Request schema for signInWithEmailLink endpoint.

    https://cloud.google.com/identity-platform/docs/reference/rest/v1/accounts/signInWithEmailLink
    """

    email: str
    oobCode: str  # Out-of-band code from the sign-in link
    # Optional fields
    idToken: NotRequired[str]  # Links the email to an existing account
    tenantId: NotRequired[str]


class SendOobCodeRequest(TypedDict, total=False):
    """Request schema for sendOobCode endpoint.

    https://cloud.google.com/identity-platform/docs/reference/rest/v1/accounts/sendOobCode
    """

    requestType: Literal["EMAIL_SIGNIN"]
    email: str
    # Optional fields
    continueUrl: NotRequired[str]
    canHandleCodeInApp: NotRequired[bool]
    returnOobLink: NotRequired[bool]  # Requires service account credentials
    tenantId: NotRequired[str]


class GetAccountInfoRequest(TypedDict, total=False):
    """Request schema for lookup endpoint.

    https://cloud.google.com/identity-platform/docs/reference/rest/v1/accounts/lookup
    """

    idToken: str


# Response schemas
class SignInWithEmailLinkResponse(TypedDict, total=False):
    """Response schema for signInWithEmailLink endpoint."""

    kind: str
    idToken: str  # Firebase ID token for the authenticated user
    refreshToken: str
    expiresIn: str  # Token expiration time in seconds (not trusted client-side)
    localId: str
    email: str
    isNewUser: bool


class SendOobCodeResponse(TypedDict, total=False):
    kind: str
    email: str
    oobCode: str  # Only when returnOobLink=true
    oobLink: str  # Only when returnOobLink=true


class AccountInfoUserPayload(TypedDict, total=False):
    localId: str
    email: str
    displayName: str
    emailVerified: bool


class GetAccountInfoResponse(TypedDict, total=False):
    """Response schema for lookup endpoint."""

    kind: str
    users: list[AccountInfoUserPayload]


class ErrorResponse(TypedDict):
    """Error envelope returned with non-200 status codes."""

    error: dict  # {"code": int, "message": str, "errors": [...]}
