# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import threading
from unittest.mock import MagicMock, patch

import pytest
from azure.core.credentials import AccessToken, TokenCredential
from azure.core.exceptions import ClientAuthenticationError

from dataverse_service_client.core.auth import (
    Authenticator,
    ClientSecretAuth,
    NoAuth,
    TokenCredentialAuth,
)
from dataverse_service_client.core.errors import AuthenticationError

SCOPE = "https://org.example.com/.default"
NOW = 1_000_000.0


class _Clock:
    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now


def _credential(*tokens):
    credential = MagicMock(spec=TokenCredential)
    credential.get_token.side_effect = list(tokens)
    return credential


class TestTokenCredentialAuth:
    def test_first_call_acquires_for_scope(self):
        credential = _credential(AccessToken("t1", int(NOW) + 3600))
        auth = TokenCredentialAuth(credential, SCOPE, clock=_Clock())

        assert auth.get_valid_token() == "t1"
        credential.get_token.assert_called_once_with(SCOPE)

    def test_cached_token_reused_while_fresh(self):
        clock = _Clock()
        credential = _credential(AccessToken("t1", int(NOW) + 3600))
        auth = TokenCredentialAuth(credential, SCOPE, clock=clock)

        auth.get_valid_token()
        clock.now += 3000
        assert auth.get_valid_token() == "t1"
        assert credential.get_token.call_count == 1

    def test_refresh_inside_margin(self):
        clock = _Clock()
        credential = _credential(AccessToken("t1", int(NOW) + 3600), AccessToken("t2", int(NOW) + 7200))
        auth = TokenCredentialAuth(credential, SCOPE, clock=clock)

        assert auth.get_valid_token() == "t1"
        # 119 seconds of validity left: below the two minute margin
        clock.now += 3600 - 119
        assert auth.get_valid_token() == "t2"
        assert credential.get_token.call_count == 2

    def test_short_lived_token_rejected(self):
        credential = _credential(AccessToken("t1", int(NOW) + 60))
        auth = TokenCredentialAuth(credential, SCOPE, clock=_Clock())
        with pytest.raises(AuthenticationError):
            auth.get_valid_token()

    def test_azure_error_wrapped(self, caplog):
        credential = MagicMock(spec=TokenCredential)
        credential.get_token.side_effect = ClientAuthenticationError("AADSTS7000215: Invalid client secret")
        auth = TokenCredentialAuth(credential, SCOPE, clock=_Clock())

        with caplog.at_level("WARNING", logger="dataverse_service_client.core.auth"):
            with pytest.raises(AuthenticationError) as ei:
                auth.get_valid_token()

        assert "AADSTS7000215" in ei.value.message
        assert isinstance(ei.value.__cause__, ClientAuthenticationError)
        assert any("Token acquisition" in r.getMessage() for r in caplog.records)

    def test_failure_is_not_cached(self):
        credential = MagicMock(spec=TokenCredential)
        credential.get_token.side_effect = [
            ClientAuthenticationError("temporarily down"),
            AccessToken("t1", int(NOW) + 3600),
        ]
        auth = TokenCredentialAuth(credential, SCOPE, clock=_Clock())

        with pytest.raises(AuthenticationError):
            auth.get_valid_token()
        assert auth.get_valid_token() == "t1"

    def test_concurrent_callers_acquire_once(self):
        acquired = threading.Event()
        release = threading.Event()
        calls = []

        class SlowCredential:
            def get_token(self, *scopes, **kwargs):
                calls.append(scopes)
                acquired.set()
                release.wait(5)
                return AccessToken("shared", int(NOW) + 3600)

        credential = MagicMock(spec=TokenCredential)
        credential.get_token.side_effect = SlowCredential().get_token
        auth = TokenCredentialAuth(credential, SCOPE, clock=_Clock())

        results = []
        threads = [threading.Thread(target=lambda: results.append(auth.get_valid_token())) for _ in range(8)]
        for t in threads:
            t.start()
        acquired.wait(5)
        release.set()
        for t in threads:
            t.join(5)

        assert results == ["shared"] * 8
        assert len(calls) == 1

    def test_rejects_non_credential(self):
        with pytest.raises(TypeError):
            TokenCredentialAuth(object(), SCOPE)

    def test_requires_scope(self):
        with pytest.raises(ValueError):
            TokenCredentialAuth(MagicMock(spec=TokenCredential), "")

    def test_satisfies_authenticator_protocol(self):
        assert isinstance(TokenCredentialAuth(MagicMock(spec=TokenCredential), SCOPE), Authenticator)


class TestClientSecretAuth:
    @patch("dataverse_service_client.core.auth.ClientSecretCredential")
    def test_builds_client_secret_credential_lazily(self, mock_cls):
        mock_cls.return_value = MagicMock(spec=TokenCredential)
        mock_cls.return_value.get_token.return_value = AccessToken("secret-token", 4_102_444_800)

        auth = ClientSecretAuth("tenant", "client", "secret", SCOPE)

        mock_cls.assert_called_once_with("tenant", "client", "secret")
        mock_cls.return_value.get_token.assert_not_called()
        assert auth.get_valid_token() == "secret-token"
        assert auth.tenant_id == "tenant"
        assert auth.client_id == "client"


class TestNoAuth:
    def test_always_fails(self):
        with pytest.raises(AuthenticationError):
            NoAuth().get_valid_token()

    def test_is_an_authenticator(self):
        assert isinstance(NoAuth(), Authenticator)
