"""Auth domain router.

Thin HTTP handlers for the email-link sign-in flow. All logic lives in
AuthClient; errors propagate to the global exception handlers.
"""

from fastapi import APIRouter

from linkauth.auth.dependencies import AuthClientDep
from linkauth.auth.schemas import (
    AuthMessage,
    EmailLinkSendRequest,
    EmailLinkSignInRequest,
    EmailLinkSignInResponse,
)
from linkauth.core.constants import CommonResponses, Routes

router = APIRouter(
    prefix=Routes.AUTH.prefix,
    tags=[Routes.AUTH.tag],
    responses={**CommonResponses.BAD_REQUEST, **CommonResponses.BAD_GATEWAY},
)


@router.post("/send", response_model=AuthMessage)
async def send_sign_in_link(
    payload: EmailLinkSendRequest, auth_client: AuthClientDep
):
    """Email a sign-in link to the given address."""
    await auth_client.send_sign_in_link(
        payload.email, payload.to_action_code_settings()
    )
    return AuthMessage(message="Sign-in link sent")


@router.post("/sign-in", response_model=EmailLinkSignInResponse)
async def sign_in_with_email_link(
    payload: EmailLinkSignInRequest, auth_client: AuthClientDep
):
    """Complete sign-in with the link received by email."""
    result = await auth_client.sign_in(payload.email, payload.link)
    return EmailLinkSignInResponse.from_result(result)
