# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import uuid
from typing import Iterator, Optional, Type, TypeVar

import requests

from azure.core.credentials import TokenCredential

from .core.auth import Authenticator, ClientSecretAuth, NoAuth, TokenCredentialAuth
from .core.config import DataverseConfig
from .data._odata import _ODataClient
from .models.batch import Batch
from .models.entity import Referenceable, WriteEntity
from .models.page import Page
from .models.query import Query

E = TypeVar("E")

# Placeholder environment for clients that never reach the network
_DUMMY_URL = "https://dummy.invalid"


class DataverseClient:
    """
    Typed client for the Microsoft Dataverse Web API.

    A client holds a base URL, an HTTP transport and one authenticator, and nothing
    else: create it once and share it, including across threads, to reuse pooled
    connections. Every operation is a single HTTP call and either returns its result
    or raises a :class:`~dataverse_service_client.core.errors.DataverseError`
    subclass. Nothing is retried.

    :param base_url: Your Dataverse environment URL, for example
        ``"https://org.crm.dynamics.com"``. Trailing slash is automatically removed.
    :type base_url: :class:`str`
    :param auth: Token provider, see :mod:`dataverse_service_client.core.auth`.
    :type auth: ~dataverse_service_client.core.auth.Authenticator
    :param config: Optional timeouts and logging settings.
    :type config: ~dataverse_service_client.core.config.DataverseConfig or None
    :param session: Optional caller-owned :class:`requests.Session`. The client does not
        close sessions it did not create.
    :type session: :class:`requests.Session` or None

    :raises ValueError: If ``base_url`` is missing or empty after trimming.

    Example::

        from dataverse_service_client import DataverseClient, Query, Reference

        with DataverseClient.with_client_secret_auth(
            "https://org.crm.dynamics.com",
            "12345678-1234-1234-1234-123456789012",
            client_id,
            client_secret,
        ) as client:
            contact_id = client.create(contact)
            contact = client.retrieve(Contact, Reference("contacts", contact_id))
            page = client.retrieve_multiple(Contact, Query("contacts").limit(3))
    """

    def __init__(
        self,
        base_url: str,
        auth: Authenticator,
        config: Optional[DataverseConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth = auth
        self._config = config or DataverseConfig()
        self._odata = _ODataClient(auth, base_url, self._config, session=session)
        self.base_url = self._odata.urls.base_url

    @classmethod
    def with_client_secret_auth(
        cls,
        base_url: str,
        tenant_id: str,
        client_id: str,
        client_secret: str,
        config: Optional[DataverseConfig] = None,
    ) -> "DataverseClient":
        """
        Create a client that authenticates with an app registration and client secret.

        Credentials are not checked here: the first token is acquired lazily on the
        first call, so invalid credentials surface as
        :class:`~dataverse_service_client.core.errors.AuthenticationError` from that call.
        """
        scope = f"{(base_url or '').rstrip('/')}/.default"
        return cls(base_url, ClientSecretAuth(tenant_id, client_id, client_secret, scope), config)

    @classmethod
    def with_credential(
        cls,
        base_url: str,
        credential: TokenCredential,
        config: Optional[DataverseConfig] = None,
    ) -> "DataverseClient":
        """
        Create a client from any Azure Identity credential.

        Example::

            from azure.identity import InteractiveBrowserCredential

            client = DataverseClient.with_credential(
                "https://org.crm.dynamics.com", InteractiveBrowserCredential()
            )
        """
        scope = f"{(base_url or '').rstrip('/')}/.default"
        return cls(base_url, TokenCredentialAuth(credential, scope), config)

    @classmethod
    def new_dummy(cls) -> "DataverseClient":
        """
        Create a client whose every call fails with
        :class:`~dataverse_service_client.core.errors.AuthenticationError`.

        Useful in tests and samples that must not reach a real environment.
        """
        return cls(_DUMMY_URL, NoAuth())

    def __enter__(self) -> "DataverseClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Release the HTTP session owned by the client. Safe to call multiple times.
        """
        self._odata.close()

    # ---------------- writes ----------------
    def create(self, entity: WriteEntity) -> uuid.UUID:
        """
        Create a record and return the id the service assigned to it.

        :param entity: Any object providing ``encode()`` and ``reference()``.
        :return: Id parsed from the ``OData-EntityId`` response header.
        :rtype: uuid.UUID

        :raises EncodingError: If the entity cannot be serialized.
        :raises ServerError: If the service rejects the record, e.g. a duplicate id.
        :raises ProtocolViolation: If the response carries no usable ``OData-EntityId``.
        """
        return self._odata._create(entity)

    def update(self, entity: WriteEntity) -> None:
        """
        Update the encoded attributes of an existing record.

        Only attributes present in the payload change; the others are left untouched by
        the service. Fails with :class:`ServerError` if the record does not exist.
        """
        return self._odata._update(entity)

    def upsert(self, entity: WriteEntity) -> None:
        """
        Update the record, or create it with the entity's id if it does not exist.
        """
        return self._odata._upsert(entity)

    def delete(self, target: Referenceable) -> None:
        """
        Delete the record a :class:`Reference` (or any entity with ``reference()``) points to.
        """
        return self._odata._delete(target)

    # ---------------- reads ----------------
    def retrieve(self, entity_type: Type[E], target: Referenceable) -> E:
        """
        Fetch one record, selecting only the columns ``entity_type`` declares.

        :param entity_type: Type providing ``columns()`` and ``decode()``.
        :param target: Reference of the record to fetch.
        :raises ValidationError: If ``entity_type`` declares no columns.
        :raises DecodingError: If the payload cannot be decoded.
        :raises ServerError: If the record does not exist.
        """
        return self._odata._retrieve(entity_type, target)

    def retrieve_multiple(self, entity_type: Type[E], query: Query) -> Page[E]:
        """
        Run ``query`` and return the first page of results.

        Without :meth:`Query.limit` the service returns up to 5000 records per page.
        Continue with :meth:`retrieve_next_page` while :meth:`Page.is_incomplete` is true.
        """
        return self._odata._retrieve_multiple(entity_type, query)

    def retrieve_next_page(self, page: Page[E]) -> Page[E]:
        """
        Fetch the page following ``page`` by replaying its cursor.

        :raises NoNextPage: If ``page`` was the last page of its query.
        :raises ValidationError: If ``page`` was built without an ``entity_type``.
        """
        return self._odata._retrieve_next_page(page)

    def iter_pages(self, entity_type: Type[E], query: Query) -> Iterator[Page[E]]:
        """
        Lazily yield every page of ``query``, following cursors until the last page.

        Example::

            for page in client.iter_pages(Contact, Query("contacts")):
                for contact in page:
                    print(contact.lastname)
        """
        return self._odata._iter_pages(entity_type, query)

    # ---------------- batch / actions ----------------
    def execute(self, batch: Batch) -> None:
        """
        Send a batch as one request.

        The service rejects batches of more than 1000 operations and aborts those that
        run longer than about two minutes. The batch succeeds or fails as a whole from
        the caller's point of view; per-operation responses are not parsed.

        :raises ValidationError: If ``batch`` was built for another base URL.
        """
        return self._odata._execute(batch)

    def merge(self, entity_name: str, target: uuid.UUID, subordinate: uuid.UUID, cascade: bool = False) -> None:
        """
        Merge ``subordinate`` into ``target`` and deactivate the subordinate.

        The service supports this for ``account``, ``contact``, ``lead`` and ``incident``
        only. Other names are sent anyway and rejected by the service with a
        :class:`ServerError`.
        """
        return self._odata._merge(entity_name, target, subordinate, cascade)


__all__ = ["DataverseClient"]
