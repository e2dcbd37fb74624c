# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP transport with fixed timeouts and HTTPS enforcement.

This module provides :class:`~dataverse_service_client.core._http._HttpClient`, a thin
wrapper around a :class:`requests.Session` that applies the connect and overall
timeouts configured at client construction and converts every transport-level
failure into :class:`~dataverse_service_client.core.errors.TransportError`.

No retry or backoff is performed here.
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlsplit

import requests

from ._error_codes import TRANSPORT_CONNECTION, TRANSPORT_INSECURE_URL, TRANSPORT_TIMEOUT
from .errors import TransportError


class _HttpClient:
    """
    HTTP client bound to one session and one timeout pair.

    :param timeout: Overall (read) timeout in seconds.
    :type timeout: :class:`float`
    :param connect_timeout: Connection timeout in seconds.
    :type connect_timeout: :class:`float`
    :param https_only: Reject URLs whose scheme is not ``https``.
    :type https_only: :class:`bool`
    :param session: Optional caller-owned :class:`requests.Session`. When omitted, the
        client creates and owns one, and closes it in :meth:`close`.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        timeout: float,
        connect_timeout: float,
        https_only: bool = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = (connect_timeout, timeout)
        self.https_only = https_only
        self._owns_session = session is None
        self._session: Optional[requests.Session] = session if session is not None else requests.Session()

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Send one HTTP request.

        :param method: HTTP method (GET, POST, PATCH, DELETE).
        :type method: :class:`str`
        :param url: Absolute target URL.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``session.request()`` (headers, data).
        :return: HTTP response object, whatever its status.
        :rtype: :class:`requests.Response`
        :raises TransportError: On a non-HTTPS URL, a closed client, or any
            :class:`requests.RequestException`.
        """
        if self.https_only and urlsplit(url).scheme.lower() != "https":
            raise TransportError(f"Refusing to send request over a non-HTTPS URL: {url}", subcode=TRANSPORT_INSECURE_URL)
        if self._session is None:
            raise TransportError("HTTP client is closed")

        kwargs.setdefault("timeout", self.timeout)
        try:
            return self._session.request(method, url, **kwargs)
        except requests.exceptions.Timeout as exc:
            raise TransportError(f"{method} {url} timed out: {exc}", subcode=TRANSPORT_TIMEOUT) from exc
        except requests.exceptions.ConnectionError as exc:
            raise TransportError(f"{method} {url} failed to connect: {exc}", subcode=TRANSPORT_CONNECTION) from exc
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

    def close(self) -> None:
        """
        Release the session if this client created it. Safe to call multiple times.
        """
        if self._session is not None and self._owns_session:
            self._session.close()
        self._session = None
