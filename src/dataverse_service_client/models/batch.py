# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Batch envelope builder for the ``$batch`` endpoint.

A :class:`Batch` collects write operations into a single change set and renders the
``multipart/mixed`` body that :meth:`~dataverse_service_client.client.DataverseClient.execute`
sends as one request. Entities are encoded when they are added, so rendering never fails.

The service limits a batch to 1000 operations and about two minutes of execution
time. How many operations fit in that time depends on the server-side logic attached
to the entity; 50 per batch has proven safe in practice. Sizing is up to the caller.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, List, Optional

from ..common.constants import CONTENT_TYPE_HTTP, CONTENT_TYPE_JSON, HEADER_IF_MATCH
from ..core._serialization import encode_entity
from ..data._urls import _UrlBuilder
from .entity import reference_of

__all__ = ["Batch"]

_CRLF = "\r\n"


@dataclass(frozen=True)
class _ChangeRequest:
    method: str
    url: str
    body: Optional[str] = None
    if_match: bool = False


class Batch:
    """
    Ordered list of change requests sent in one ``$batch`` call.

    :param base_url: Environment URL the contained requests target,
        e.g. ``"https://org.crm.dynamics.com"``. It must match the base URL of the
        client that executes the batch.
    :type base_url: str

    Example::

        batch = Batch("https://org.crm.dynamics.com")
        batch.create(testy_contact)
        batch.create(marianne_contact)
        client.execute(batch)
    """

    def __init__(self, base_url: str) -> None:
        self._urls = _UrlBuilder(base_url)
        if not self._urls.base_url:
            raise ValueError("base_url is required.")
        self.batch_id = uuid.uuid4()
        self.changeset_id = uuid.uuid4()
        self._requests: List[_ChangeRequest] = []

    def create(self, entity: Any) -> "Batch":
        """Queue a create of ``entity``.

        :raises EncodingError: If the entity cannot be serialized.
        """
        reference = reference_of(entity)
        self._requests.append(_ChangeRequest("POST", self._urls.simple(reference.collection), encode_entity(entity)))
        return self

    def update(self, entity: Any) -> "Batch":
        """Queue an update that fails if the record does not exist."""
        reference = reference_of(entity)
        url = self._urls.targeted(reference.collection, reference.id)
        self._requests.append(_ChangeRequest("PATCH", url, encode_entity(entity), if_match=True))
        return self

    def upsert(self, entity: Any) -> "Batch":
        """Queue an update that creates the record if it does not exist."""
        reference = reference_of(entity)
        url = self._urls.targeted(reference.collection, reference.id)
        self._requests.append(_ChangeRequest("PATCH", url, encode_entity(entity)))
        return self

    def delete(self, target: Any) -> "Batch":
        reference = reference_of(target)
        self._requests.append(_ChangeRequest("DELETE", self._urls.targeted(reference.collection, reference.id)))
        return self

    @property
    def base_url(self) -> str:
        """Environment URL the contained requests target, without a trailing slash."""
        return self._urls.base_url

    def __len__(self) -> int:
        return len(self._requests)

    def _render_request(self, content_id: int, request: _ChangeRequest) -> List[str]:
        lines = [
            f"--changeset_{self.changeset_id}",
            f"Content-Type: {CONTENT_TYPE_HTTP}",
            "Content-Transfer-Encoding: binary",
            f"Content-ID: {content_id}",
            "",
            f"{request.method} {request.url} HTTP/1.1",
        ]
        if request.if_match:
            lines.append(f"{HEADER_IF_MATCH}: *")
        if request.body is not None:
            lines.append(f"Content-Type: {CONTENT_TYPE_JSON}; type=entry")
            lines.append("")
            lines.append(request.body)
        else:
            lines.append("")
        return lines

    def __str__(self) -> str:
        lines = []
        if self._requests:
            lines.append(f"--batch_{self.batch_id}")
            lines.append(f"Content-Type: multipart/mixed; boundary=changeset_{self.changeset_id}")
            lines.append("")
            for content_id, request in enumerate(self._requests, start=1):
                lines.extend(self._render_request(content_id, request))
            lines.append(f"--changeset_{self.changeset_id}--")
        lines.append(f"--batch_{self.batch_id}--")
        lines.append("")
        return _CRLF.join(lines)
