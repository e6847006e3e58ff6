"""Unit tests for the Supabase credentials sign-in helper."""

import pytest
from supabase import AuthApiError, AuthInvalidCredentialsError

from dashboard_server.auth import SignInError, SignInErrorKind, SupabaseSignIn

from tests.fakes import FakeSupabase


CREDENTIALS = {"email": "user@nextmail.com", "password": "123456", "redirectTo": "/dashboard"}


def sign_in_with(client):
    return SupabaseSignIn(lambda: client)


def test_sign_in_passes_only_email_and_password():
    client = FakeSupabase()

    sign_in_with(client).sign_in("credentials", CREDENTIALS)

    assert client.auth.calls == [{"email": "user@nextmail.com", "password": "123456"}]


def test_sign_in_returns_the_new_session():
    client = FakeSupabase()

    session = sign_in_with(client).sign_in("credentials", CREDENTIALS)

    assert session is client.auth.session
    assert session.access_token == "access-user@nextmail.com"


def test_each_sign_in_uses_its_own_client():
    clients = []

    def factory():
        clients.append(FakeSupabase())
        return clients[-1]

    sign_in = SupabaseSignIn(factory)
    first = sign_in.sign_in("credentials", {"email": "ann@nextmail.com", "password": "123456"})
    second = sign_in.sign_in("credentials", {"email": "bob@nextmail.com", "password": "654321"})

    assert len(clients) == 2
    assert [len(client.auth.calls) for client in clients] == [1, 1]
    assert first.access_token == "access-ann@nextmail.com"
    assert second.access_token == "access-bob@nextmail.com"
    assert clients[0].auth.session is first
    assert not hasattr(sign_in, "supabase")


def test_unknown_provider_is_configuration_error():
    client = FakeSupabase()

    with pytest.raises(SignInError) as excinfo:
        sign_in_with(client).sign_in("github", CREDENTIALS)

    assert excinfo.value.kind is SignInErrorKind.CONFIGURATION
    assert client.auth.calls == []


@pytest.mark.parametrize("credentials", [
    {"email": "not-an-email", "password": "123456"},
    {"email": "user@nextmail.com", "password": "123"},
    {"email": "user@nextmail.com"},
    {},
])
def test_malformed_credentials_never_reach_auth_server(credentials):
    client = FakeSupabase()

    with pytest.raises(SignInError) as excinfo:
        sign_in_with(client).sign_in("credentials", credentials)

    assert excinfo.value.kind is SignInErrorKind.CREDENTIALS_SIGNIN
    assert client.auth.calls == []


def test_rejected_password_is_credentials_signin():
    client = FakeSupabase(auth_error=AuthApiError("Invalid login credentials", 400, "invalid_credentials"))

    with pytest.raises(SignInError) as excinfo:
        sign_in_with(client).sign_in("credentials", CREDENTIALS)

    assert excinfo.value.kind is SignInErrorKind.CREDENTIALS_SIGNIN
    assert isinstance(excinfo.value.__cause__, AuthApiError)


def test_client_side_credentials_error_is_credentials_signin():
    client = FakeSupabase(auth_error=AuthInvalidCredentialsError("You must provide a password"))

    with pytest.raises(SignInError) as excinfo:
        sign_in_with(client).sign_in("credentials", CREDENTIALS)

    assert excinfo.value.kind is SignInErrorKind.CREDENTIALS_SIGNIN


def test_other_bad_request_errors_propagate_unchanged():
    error = AuthApiError("Email not confirmed", 400, "email_not_confirmed")
    client = FakeSupabase(auth_error=error)

    with pytest.raises(AuthApiError) as excinfo:
        sign_in_with(client).sign_in("credentials", CREDENTIALS)

    assert excinfo.value is error


def test_server_side_auth_error_propagates_unchanged():
    error = AuthApiError("Database error querying schema", 500, "unexpected_failure")
    client = FakeSupabase(auth_error=error)

    with pytest.raises(AuthApiError) as excinfo:
        sign_in_with(client).sign_in("credentials", CREDENTIALS)

    assert excinfo.value is error
