"""Auth domain exceptions.

Errors raised while building email-link requests, decoding backend replies,
or talking to the authentication backend.
"""

from linkauth.core.exceptions import ExternalServiceError, ValidationError


# Validation errors (400) - raised before anything is sent
class MalformedLinkError(ValidationError):
    """Raised when a sign-in link carries no oobCode."""

    error_type = "malformed_link"

    def __init__(self, message: str = "Sign-in link does not contain an oobCode"):
        super().__init__(message)


class InvalidSettingsError(ValidationError):
    """Raised when required action code settings are missing."""

    error_type = "invalid_action_code_settings"

    def __init__(self, message: str = "Invalid action code settings"):
        super().__init__(message)


class MissingTokenError(ValidationError):
    """Raised when account info is requested without an access token."""

    error_type = "missing_token"

    def __init__(self, message: str = "Access token is required"):
        super().__init__(message)


# External service errors (502)
class MalformedResponseError(ExternalServiceError):
    """Raised when a backend reply lacks required fields."""

    error_type = "malformed_response"

    def __init__(
        self, message: str = "Authentication backend returned an invalid response"
    ):
        super().__init__(message)


class BackendError(ExternalServiceError):
    """Opaque failure reported by the authentication backend or its transport.

    ``code`` and ``message`` are passed through from the backend unchanged.
    Rejections (4xx) surface as 400, everything else as 502.
    """

    error_type = "backend_error"

    def __init__(
        self,
        code: str = "UNKNOWN",
        message: str = "Authentication backend error",
        http_status: int | None = None,
    ):
        self.code = code
        self.http_status = http_status
        if http_status is not None and 400 <= http_status < 500:
            self.status_code = 400
        super().__init__(message)
