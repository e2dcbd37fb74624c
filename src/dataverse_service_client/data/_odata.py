# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Low-level Dataverse Web API client: request pipeline and CRUD assembly.

Every operation follows the same path through :meth:`_ODataClient._dispatch`:
build a URL, obtain a token, attach the standard headers, let the operation add its
own headers and body, send, classify the status, and interpret the response.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable, Dict, Iterator, Optional, TypeVar

import requests

from ..common.constants import (
    BATCH_SEGMENT,
    CONTENT_TYPE_BATCH,
    CONTENT_TYPE_JSON,
    HEADER_CLIENT_REQUEST_ID,
    HEADER_IF_MATCH,
    MERGE_ACTION,
    ODATA_MAX_VERSION,
    ODATA_VERSION,
)
from ..core._http import _HttpClient
from ..core._serialization import dumps, encode_entity
from ..core.auth import Authenticator
from ..core.config import DataverseConfig
from ..core._error_codes import VALIDATION_BASE_URL_MISMATCH, VALIDATION_MISSING_ENTITY_TYPE
from ..core.errors import AuthenticationError, DataverseError, NoNextPage, TransportError, ValidationError
from ..models.entity import columns_of, reference_of
from ..models.merge import MergeRequest
from ..models.page import Page
from . import _response
from ._urls import _UrlBuilder

T = TypeVar("T")

# Mutable keyword arguments for one ``requests`` call: ``headers`` and optionally ``data``.
_Request = Dict[str, Any]


def _ignore_body(response: requests.Response) -> None:
    return None


def _json_body(body: Callable[[], str], **extra_headers: str) -> Callable[[_Request], None]:
    """Return a prepare step that attaches a JSON body and any extra headers."""

    def prepare(request: _Request) -> None:
        request["headers"]["Content-Type"] = CONTENT_TYPE_JSON
        request["headers"].update(extra_headers)
        request["data"] = body().encode("utf-8")

    return prepare


def _no_body(request: _Request) -> None:
    return None


class _ODataClient:
    """
    Dataverse Web API client shared by all public operations.

    Holds only immutable collaborators (URL builder, transport, authenticator), so one
    instance can serve concurrent calls from many threads.

    :param auth: Token provider.
    :type auth: ~dataverse_service_client.core.auth.Authenticator
    :param base_url: Environment URL, e.g. ``"https://org.crm.dynamics.com"``.
    :type base_url: str
    :param config: Client configuration; defaults to :class:`DataverseConfig`.
    :param session: Optional caller-owned :class:`requests.Session`.
    """

    def __init__(
        self,
        auth: Authenticator,
        base_url: str,
        config: Optional[DataverseConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth = auth
        self.urls = _UrlBuilder(base_url)
        if not self.urls.base_url:
            raise ValueError("base_url is required.")
        self.config = config or DataverseConfig()
        self._http = _HttpClient(
            timeout=self.config.http_timeout,
            connect_timeout=self.config.http_connect_timeout,
            https_only=self.config.https_only,
            session=session,
        )
        self._logger = logging.getLogger(self.config.logger_name)

    def close(self) -> None:
        self._http.close()

    # ----------------------------- pipeline ---------------------------------
    def _token(self) -> str:
        try:
            return self.auth.get_valid_token()
        except DataverseError:
            raise
        except Exception as exc:
            raise AuthenticationError(f"Authenticator {type(self.auth).__name__} failed: {exc}") from exc

    def _headers(self, token: str) -> Dict[str, str]:
        """Build standard OData headers with bearer auth."""
        return {
            "Authorization": f"Bearer {token}",
            "Accept": CONTENT_TYPE_JSON,
            "OData-MaxVersion": ODATA_MAX_VERSION,
            "OData-Version": ODATA_VERSION,
            HEADER_CLIENT_REQUEST_ID: str(uuid.uuid4()),
        }

    def _dispatch(
        self,
        operation: str,
        method: str,
        url: str,
        prepare: Callable[[_Request], None],
        interpret: Callable[[requests.Response], T],
    ) -> T:
        """
        Run one authenticated request.

        :param operation: Operation name used in log records, e.g. ``"records.create"``.
        :param method: HTTP method.
        :param url: Absolute URL.
        :param prepare: Adds method-specific headers and body to the request kwargs.
        :param interpret: Turns a successful response into the operation result.
        :raises AuthenticationError: If no token could be obtained.
        :raises EncodingError: If ``prepare`` could not serialize the body.
        :raises TransportError: If no response was received.
        :raises ServerError: On any 4xx/5xx status.
        """
        token = self._token()
        request: _Request = {"headers": self._headers(token)}
        prepare(request)
        client_request_id = request["headers"][HEADER_CLIENT_REQUEST_ID]

        start = time.perf_counter()
        try:
            response = self._http._request(method, url, **request)
        except TransportError as exc:
            self._logger.warning(
                f"{operation} {method} transport failure: {exc.message}",
                extra={"client_request_id": client_request_id},
            )
            raise
        duration_ms = (time.perf_counter() - start) * 1000.0

        status_code = response.status_code
        level = logging.WARNING if status_code >= 400 else logging.DEBUG
        self._logger.log(
            level,
            f"{operation} {method} {status_code} {duration_ms:.1f}ms",
            extra={"client_request_id": client_request_id},
        )

        _response.classify(response)
        return interpret(response)

    # ----------------------------- CRUD ---------------------------------
    def _create(self, entity: Any) -> uuid.UUID:
        """POST the encoded entity and return the id from ``OData-EntityId``."""
        reference = reference_of(entity)
        return self._dispatch(
            "records.create",
            "POST",
            self.urls.simple(reference.collection),
            _json_body(lambda: encode_entity(entity)),
            _response.created_id,
        )

    def _update(self, entity: Any) -> None:
        """PATCH the encoded fields; ``If-Match: *`` makes it fail if the record does not exist."""
        reference = reference_of(entity)
        return self._dispatch(
            "records.update",
            "PATCH",
            self.urls.targeted(reference.collection, reference.id),
            _json_body(lambda: encode_entity(entity), **{HEADER_IF_MATCH: "*"}),
            _ignore_body,
        )

    def _upsert(self, entity: Any) -> None:
        """PATCH without ``If-Match`` so the service creates the record if it is absent."""
        reference = reference_of(entity)
        return self._dispatch(
            "records.upsert",
            "PATCH",
            self.urls.targeted(reference.collection, reference.id),
            _json_body(lambda: encode_entity(entity)),
            _ignore_body,
        )

    def _delete(self, target: Any) -> None:
        reference = reference_of(target)
        return self._dispatch(
            "records.delete",
            "DELETE",
            self.urls.targeted(reference.collection, reference.id),
            _no_body,
            _ignore_body,
        )

    def _retrieve(self, entity_type: Any, target: Any) -> Any:
        reference = reference_of(target)
        url = self.urls.retrieve(reference.collection, reference.id, columns_of(entity_type))

        def interpret(response: requests.Response) -> Any:
            return _response.decode_entity(entity_type, _response.read_json(response))

        return self._dispatch("records.retrieve", "GET", url, _no_body, interpret)

    # ----------------------------- paging ---------------------------------
    def _page_interpreter(self, entity_type: Any) -> Callable[[requests.Response], Page[Any]]:
        def interpret(response: requests.Response) -> Page[Any]:
            entities, next_link = _response.decode_collection(entity_type, _response.read_json(response))
            return Page(entities, next_link, entity_type)

        return interpret

    def _retrieve_multiple(self, entity_type: Any, query: Any) -> Page[Any]:
        url = self.urls.query(columns_of(entity_type), query)
        return self._dispatch("query.retrieve_multiple", "GET", url, _no_body, self._page_interpreter(entity_type))

    def _retrieve_next_page(self, page: Page[Any]) -> Page[Any]:
        if page.next_link is None:
            raise NoNextPage()
        if page.entity_type is None:
            raise ValidationError(
                "Page carries no entity type to decode the next page with",
                subcode=VALIDATION_MISSING_ENTITY_TYPE,
            )
        # The cursor is replayed exactly as the service returned it.
        return self._dispatch(
            "query.retrieve_next_page",
            "GET",
            page.next_link,
            _no_body,
            self._page_interpreter(page.entity_type),
        )

    def _iter_pages(self, entity_type: Any, query: Any) -> Iterator[Page[Any]]:
        page = self._retrieve_multiple(entity_type, query)
        yield page
        while page.is_incomplete():
            page = self._retrieve_next_page(page)
            yield page

    # ----------------------------- batch / actions ---------------------------------
    def _execute(self, batch: Any) -> None:
        """POST a pre-rendered batch envelope. The whole batch is one outcome."""
        if batch.base_url != self.urls.base_url:
            raise ValidationError(
                f"Batch targets {batch.base_url} but the client is bound to {self.urls.base_url}",
                subcode=VALIDATION_BASE_URL_MISMATCH,
            )

        def prepare(request: _Request) -> None:
            request["headers"]["Content-Type"] = CONTENT_TYPE_BATCH.format(batch_id=batch.batch_id)
            request["data"] = str(batch).encode("utf-8")

        return self._dispatch("batch.execute", "POST", self.urls.simple(BATCH_SEGMENT), prepare, _ignore_body)

    def _merge(self, entity_name: str, target: uuid.UUID, subordinate: uuid.UUID, cascade: bool = False) -> None:
        merge_request = MergeRequest(str(entity_name), target, subordinate, cascade)
        return self._dispatch(
            "actions.merge",
            "POST",
            self.urls.simple(MERGE_ACTION),
            _json_body(lambda: dumps(merge_request.to_payload())),
            _ignore_body,
        )
