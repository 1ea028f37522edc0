"""Request builders for the email-link sign-in flow.

Builders validate their inputs and fail before anything reaches the backend.
"""

from urllib.parse import parse_qs, urlsplit

from linkauth.auth.exceptions import (
    InvalidSettingsError,
    MalformedLinkError,
    MissingTokenError,
)
from linkauth.auth.models import (
    AccountInfoRequest,
    ActionCodeSettings,
    SendSignInLinkRequest,
    SignInLinkRequest,
)

# Redirect wrappers (e.g. Dynamic Links) carry the action link in one of these.
_NESTED_LINK_PARAMS = ("link", "deep_link_id")
_SIGN_IN_MODE = "signIn"


def _find_action_params(link: str) -> dict[str, list[str]] | None:
    """Return the innermost query parameters that contain an oobCode.

    Walks nested links depth-first with an explicit stack, so arbitrarily deep
    wrapping cannot exhaust the interpreter's recursion limit. A link's nested
    links are checked before the link itself.
    """
    stack: list[tuple[dict[str, list[str]], bool]] = [
        (parse_qs(urlsplit(link).query), False)
    ]
    while stack:
        params, expanded = stack.pop()
        if expanded:
            if any(params.get("oobCode", [])):
                return params
            continue
        stack.append((params, True))
        nested_links = [
            nested_link
            for key in _NESTED_LINK_PARAMS
            for nested_link in params.get(key, [])
        ]
        # Reversed so the first nested link is visited first.
        for nested_link in reversed(nested_links):
            stack.append((parse_qs(urlsplit(nested_link).query), False))
    return None


def extract_oob_code(link: str) -> str:
    """Extract the oobCode from a sign-in link.

    Raises:
        MalformedLinkError: If no non-empty oobCode is present
    """
    params = _find_action_params(link)
    if params is None:
        raise MalformedLinkError()
    return next(code for code in params["oobCode"] if code)


def is_sign_in_with_email_link(link: str) -> bool:
    """Check whether a link is an email sign-in link.

    True when an oobCode is present and the accompanying ``mode``, if any,
    is ``signIn``.
    """
    params = _find_action_params(link)
    if params is None:
        return False
    modes = params.get("mode")
    return not modes or modes[0] == _SIGN_IN_MODE


def build_sign_in_link_request(
    email: str, sign_in_link: str, api_key: str
) -> SignInLinkRequest:
    return SignInLinkRequest(
        email=email,
        oob_code=extract_oob_code(sign_in_link),
        api_key=api_key,
    )


def build_send_sign_in_link_request(
    email: str,
    action_code_settings: ActionCodeSettings,
    api_key: str,
    *,
    return_oob_link: bool = False,
) -> SendSignInLinkRequest:
    """Build the sendOobCode request for an EMAIL_SIGNIN link.

    Raises:
        InvalidSettingsError: If handle_code_in_app is set without a continue URL
    """
    if action_code_settings.handle_code_in_app and not action_code_settings.url:
        raise InvalidSettingsError(
            "A continue URL is required when handle_code_in_app is true"
        )
    return SendSignInLinkRequest(
        email=email,
        continue_url=action_code_settings.url,
        handle_code_in_app=action_code_settings.handle_code_in_app,
        api_key=api_key,
        return_oob_link=return_oob_link,
    )


def build_account_info_request(api_key: str, access_token: str) -> AccountInfoRequest:
    if not access_token:
        raise MissingTokenError()
    return AccountInfoRequest(api_key=api_key, access_token=access_token)
