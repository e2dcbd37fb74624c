# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Pluggable authentication for the Dataverse service client.

An authenticator exposes a single operation, :meth:`Authenticator.get_valid_token`.
Implementations acquire tokens lazily, cache them, and must return a token that
remains valid for at least :data:`~dataverse_service_client.common.constants.TOKEN_REFRESH_MARGIN_SECONDS`
seconds. The request pipeline never re-authenticates after a token was handed out.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Protocol, runtime_checkable

from azure.core.credentials import AccessToken, TokenCredential
from azure.core.exceptions import AzureError
from azure.identity import ClientSecretCredential

from ..common.constants import TOKEN_REFRESH_MARGIN_SECONDS
from .errors import AuthenticationError

logger = logging.getLogger(__name__)


@runtime_checkable
class Authenticator(Protocol):
    """Capability that hands out bearer tokens for the Dataverse Web API."""

    def get_valid_token(self) -> str:
        """
        Return an access token valid for at least the next two minutes.

        :raises AuthenticationError: If no token can be acquired.
        """
        ...


class TokenCredentialAuth:
    """
    Authenticator backed by any :class:`azure.core.credentials.TokenCredential`.

    The last :class:`~azure.core.credentials.AccessToken` is cached and reused until
    fewer than ``refresh_margin`` seconds of validity remain. Refresh is serialized
    with a lock so concurrent callers trigger at most one acquisition.

    :param credential: Azure Identity credential.
    :type credential: ~azure.core.credentials.TokenCredential
    :param scope: OAuth scope, e.g. ``"https://org.crm.dynamics.com/.default"``.
    :type scope: str
    :param refresh_margin: Minimum remaining validity in seconds of a handed-out token.
    :type refresh_margin: int
    """

    def __init__(
        self,
        credential: TokenCredential,
        scope: str,
        *,
        refresh_margin: int = TOKEN_REFRESH_MARGIN_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not isinstance(credential, TokenCredential):
            raise TypeError("credential must implement azure.core.credentials.TokenCredential.")
        if not scope:
            raise ValueError("scope is required.")
        self.credential: TokenCredential = credential
        self.scope = scope
        self.refresh_margin = refresh_margin
        self._clock = clock
        self._lock = threading.Lock()
        self._token: Optional[AccessToken] = None

    def _is_fresh(self, token: Optional[AccessToken]) -> bool:
        return token is not None and token.expires_on - self._clock() >= self.refresh_margin

    def get_valid_token(self) -> str:
        token = self._token
        if self._is_fresh(token):
            return token.token
        with self._lock:
            # Another thread may have refreshed while we waited.
            if not self._is_fresh(self._token):
                self._token = self._acquire()
            return self._token.token

    def _acquire(self) -> AccessToken:
        try:
            token = self.credential.get_token(self.scope)
        except AzureError as exc:
            logger.warning("Token acquisition for scope %s failed: %s", self.scope, exc)
            raise AuthenticationError(f"Failed to acquire token for {self.scope}: {exc}") from exc
        if not self._is_fresh(token):
            raise AuthenticationError(
                f"Credential returned a token for {self.scope} that expires in less than "
                f"{self.refresh_margin} seconds"
            )
        logger.debug("Acquired token for scope %s", self.scope)
        return token


class ClientSecretAuth(TokenCredentialAuth):
    """
    Client-credentials (app registration + secret) token exchange against Microsoft Entra ID.

    Construction performs no network call; the first token is acquired on the first request.

    :param tenant_id: Directory (tenant) id.
    :type tenant_id: str
    :param client_id: Application (client) id.
    :type client_id: str
    :param client_secret: Client secret.
    :type client_secret: str
    :param scope: OAuth scope, e.g. ``"https://org.crm.dynamics.com/.default"``.
    :type scope: str
    """

    def __init__(self, tenant_id: str, client_id: str, client_secret: str, scope: str) -> None:
        super().__init__(ClientSecretCredential(tenant_id, client_id, client_secret), scope)
        self.tenant_id = tenant_id
        self.client_id = client_id


class NoAuth:
    """Authenticator that always fails. Useful for tests and documentation samples."""

    def get_valid_token(self) -> str:
        raise AuthenticationError("NoAuth cannot provide tokens")


__all__ = ["Authenticator", "TokenCredentialAuth", "ClientSecretAuth", "NoAuth"]
