"""Auth domain schemas.

Request and response schemas for the email-link HTTP endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from linkauth.auth.models import ActionCodeSettings, AuthDataResult


class EmailLinkSendRequest(BaseModel):
    """Request schema for sending a sign-in link."""

    email: EmailStr
    continue_url: str | None = None
    handle_code_in_app: bool = True

    def to_action_code_settings(self) -> ActionCodeSettings:
        return ActionCodeSettings(
            url=self.continue_url,
            handle_code_in_app=self.handle_code_in_app,
        )


class EmailLinkSignInRequest(BaseModel):
    """Request schema for completing sign-in with the emailed link."""

    email: EmailStr
    link: str = Field(min_length=1)


class SignInUser(BaseModel):
    local_id: str
    email: str | None
    display_name: str | None
    email_verified: bool
    is_anonymous: bool


class EmailLinkSignInResponse(BaseModel):
    """Response schema for a completed email-link sign-in."""

    user: SignInUser
    id_token: str
    refresh_token: str
    expires_at: datetime
    is_new_user: bool

    @classmethod
    def from_result(cls, result: AuthDataResult) -> "EmailLinkSignInResponse":
        user = result.user
        return cls(
            user=SignInUser(
                local_id=user.local_id,
                email=user.email,
                display_name=user.display_name,
                email_verified=user.email_verified,
                is_anonymous=user.is_anonymous,
            ),
            id_token=user.id_token,
            refresh_token=user.refresh_token,
            expires_at=user.approximate_expiration_date,
            is_new_user=result.additional_user_info.is_new_user,
        )


class AuthMessage(BaseModel):
    """Generic auth message response."""

    message: str
