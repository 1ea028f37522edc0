"""Tests for linkauth/auth/resolver.py - Session resolver state machine."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from linkauth.auth.exceptions import (
    BackendError,
    MalformedLinkError,
    MalformedResponseError,
)
from linkauth.auth.models import AccountInfoRequest, SignInLinkRequest
from linkauth.auth.resolver import ResolverState, SessionResolver

EMAIL = "johnnyappleseed@apple.com"
SIGN_IN_LINK = (
    "https://test.firebaseapp.com/__/auth/action"
    "?apiKey=testAPIKey&mode=signIn&oobCode=testoobcode"
)


def test_resolver_states_are_plain_strings():
    assert ResolverState.idle == "idle"
    assert ResolverState.failed.value == "failed"
    assert isinstance(ResolverState.resolved, str)


class TestSessionResolver:
    @pytest.mark.asyncio
    async def test_resolves_session(self, credentials, mock_backend):
        resolver = SessionResolver(credentials, mock_backend)

        result = await resolver.resolve(EMAIL, SIGN_IN_LINK)

        assert resolver.state is ResolverState.resolved
        user = result.user
        assert user.local_id == "LOCAL_ID"
        assert user.email == EMAIL
        assert user.display_name == "Johnny Appleseed"
        assert user.refresh_token == "REFRESH_TOKEN"
        assert user.id_token == "ACCESS_TOKEN"
        assert user.email_verified is True
        assert user.is_anonymous is False
        assert result.additional_user_info.provider_id == "password"
        assert result.additional_user_info.sign_in_method == "emailLink"
        assert result.additional_user_info.is_new_user is False

    @pytest.mark.asyncio
    async def test_requests_are_sequential_and_chained(
        self, credentials, mock_backend
    ):
        """Test account info is fetched with the ID token from sign-in."""
        await SessionResolver(credentials, mock_backend).resolve(EMAIL, SIGN_IN_LINK)

        sign_in_request, account_info_request = mock_backend.requests
        assert isinstance(sign_in_request, SignInLinkRequest)
        assert sign_in_request.email == EMAIL
        assert sign_in_request.oob_code == "testoobcode"
        assert isinstance(account_info_request, AccountInfoRequest)
        assert account_info_request.access_token == "ACCESS_TOKEN"

    @pytest.mark.asyncio
    async def test_uses_configured_ttl(self, credentials, mock_backend):
        ttl = timedelta(minutes=5)
        before = datetime.now(UTC)

        result = await SessionResolver(
            credentials, mock_backend, access_token_ttl=ttl
        ).resolve(EMAIL, SIGN_IN_LINK)

        expiration = result.user.approximate_expiration_date
        assert before + ttl <= expiration <= datetime.now(UTC) + ttl

    @pytest.mark.asyncio
    async def test_uses_first_account_user(self, credentials, mock_backend):
        mock_backend.account_info_payload = {
            "users": [
                {"localId": "FIRST", "email": "first@example.com"},
                {"localId": "SECOND", "email": "second@example.com"},
            ]
        }

        result = await SessionResolver(credentials, mock_backend).resolve(
            EMAIL, SIGN_IN_LINK
        )

        assert result.user.local_id == "FIRST"
        assert result.user.email == "first@example.com"

    @pytest.mark.asyncio
    async def test_malformed_link_fails_before_backend_call(
        self, credentials, mock_backend
    ):
        resolver = SessionResolver(credentials, mock_backend)

        with pytest.raises(MalformedLinkError):
            await resolver.resolve(EMAIL, "https://test.apps.com/?mode=signIn")

        assert resolver.state is ResolverState.failed
        assert mock_backend.requests == []

    @pytest.mark.asyncio
    async def test_zero_users_fails_with_malformed_response(
        self, credentials, mock_backend
    ):
        mock_backend.account_info_payload = {"users": []}
        resolver = SessionResolver(credentials, mock_backend)

        with pytest.raises(MalformedResponseError):
            await resolver.resolve(EMAIL, SIGN_IN_LINK)

        assert resolver.state is ResolverState.failed

    @pytest.mark.asyncio
    async def test_sign_in_backend_error_short_circuits(
        self, credentials, mock_backend
    ):
        error = BackendError("INVALID_OOB_CODE", "INVALID_OOB_CODE", http_status=400)
        mock_backend.errors[SignInLinkRequest] = error
        resolver = SessionResolver(credentials, mock_backend)

        with pytest.raises(BackendError) as exc_info:
            await resolver.resolve(EMAIL, SIGN_IN_LINK)

        assert exc_info.value is error
        assert resolver.state is ResolverState.failed
        assert len(mock_backend.requests) == 1

    @pytest.mark.asyncio
    async def test_account_info_backend_error_propagates_unchanged(
        self, credentials, mock_backend
    ):
        error = BackendError("USER_NOT_FOUND", "USER_NOT_FOUND", http_status=400)
        mock_backend.errors[AccountInfoRequest] = error

        with pytest.raises(BackendError) as exc_info:
            await SessionResolver(credentials, mock_backend).resolve(
                EMAIL, SIGN_IN_LINK
            )

        assert exc_info.value is error
        assert len(mock_backend.requests) == 2

    @pytest.mark.asyncio
    async def test_missing_sign_in_token_fails(self, credentials, mock_backend):
        del mock_backend.sign_in_payload["refreshToken"]

        with pytest.raises(MalformedResponseError):
            await SessionResolver(credentials, mock_backend).resolve(
                EMAIL, SIGN_IN_LINK
            )

        assert len(mock_backend.requests) == 1

    @pytest.mark.asyncio
    async def test_empty_id_token_never_requests_account_info(self, credentials):
        backend = AsyncMock()
        backend.send.return_value = {"idToken": "", "refreshToken": "REFRESH_TOKEN"}

        with pytest.raises(MalformedResponseError):
            await SessionResolver(credentials, backend).resolve(EMAIL, SIGN_IN_LINK)

        backend.send.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_resolver_is_single_shot(self, credentials, mock_backend):
        resolver = SessionResolver(credentials, mock_backend)
        await resolver.resolve(EMAIL, SIGN_IN_LINK)

        with pytest.raises(RuntimeError, match=r"state=resolved\)"):
            await resolver.resolve(EMAIL, SIGN_IN_LINK)

        assert len(mock_backend.requests) == 2

    @pytest.mark.asyncio
    async def test_failed_resolver_is_not_reusable(self, credentials, mock_backend):
        resolver = SessionResolver(credentials, mock_backend)
        with pytest.raises(MalformedLinkError):
            await resolver.resolve(EMAIL, "https://test.apps.com")

        with pytest.raises(RuntimeError):
            await resolver.resolve(EMAIL, SIGN_IN_LINK)
