"""Firebase Admin SDK helpers.

Only used for privileged Identity Toolkit calls (``returnOobLink``), which
need a service account bearer token instead of the public API key.
"""

from firebase_admin import get_app, initialize_app

from linkauth.core.exceptions import InternalError


def init_firebase() -> None:
    """Initialize Firebase Admin SDK (idempotent).

    Uses GOOGLE_APPLICATION_CREDENTIALS environment variable for credentials.
    """
    try:
        get_app()
    except ValueError:
        initialize_app()


def get_admin_access_token() -> str:
    """Get an OAuth2 access token from the Firebase Admin SDK credentials.

    Raises:
        InternalError: If Firebase Admin SDK is not initialized
    """
    try:
        app = get_app()
    except ValueError as e:
        raise InternalError("Firebase Admin SDK not initialized") from e
    return app.credential.get_access_token().access_token
