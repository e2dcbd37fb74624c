# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Response interpretation shared by every operation.

:func:`classify` turns any 4xx/5xx response into a
:class:`~dataverse_service_client.core.errors.ServerError`, whichever operation issued
the call. The remaining helpers pull identifiers, JSON bodies and decoded entities out
of successful responses.
"""

from __future__ import annotations

import uuid
from typing import Any, Optional, Tuple

import requests

from ..common.constants import (
    FALLBACK_ERROR_MESSAGE,
    HEADER_CORRELATION_ID,
    HEADER_ENTITY_ID,
    HEADER_RETRY_AFTER,
    HEADER_SERVICE_REQUEST_ID,
    ODATA_NEXT_LINK,
    ODATA_VALUE,
)
from ..core._error_codes import PROTOCOL_MISSING_ENTITY_ID, TRANSIENT_STATUS_CODES, http_subcode
from ..core.errors import DecodingError, ProtocolViolation, ServerError

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
# Offsets of the hyphens in an 8-4-4-4-12 GUID
_GUID_HYPHENS = frozenset((8, 13, 18, 23))
_GUID_LENGTH = 36


def _header(headers: Any, name: str) -> Optional[str]:
    """Case-insensitive header lookup that also works on plain dicts."""
    if not headers:
        return None
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def _read_text(response: requests.Response) -> str:
    try:
        text = response.text
    except (requests.RequestException, UnicodeError, AttributeError):
        return FALLBACK_ERROR_MESSAGE
    if not isinstance(text, str):
        return FALLBACK_ERROR_MESSAGE
    return text


def _service_error_code(response: requests.Response) -> Optional[str]:
    try:
        body = response.json()
    except (ValueError, requests.RequestException, AttributeError):
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        code = body["error"].get("code")
        if code is not None:
            return str(code)
    return None


def _retry_after(headers: Any) -> Optional[int]:
    raw = _header(headers, HEADER_RETRY_AFTER)
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def classify(response: requests.Response) -> None:
    """
    Raise :class:`ServerError` for any 4xx or 5xx status; return for anything else.

    The error message is the response body text, verbatim and possibly empty, or
    :data:`~dataverse_service_client.common.constants.FALLBACK_ERROR_MESSAGE` when the
    body cannot be read. Redirects never reach this point: the transport
    follows them.
    """
    status = response.status_code
    if status < 400 or status >= 600:
        return
    headers = response.headers
    raise ServerError(
        _read_text(response),
        status,
        subcode=http_subcode(status),
        is_transient=status in TRANSIENT_STATUS_CODES,
        service_error_code=_service_error_code(response),
        correlation_id=_header(headers, HEADER_CORRELATION_ID),
        request_id=_header(headers, HEADER_SERVICE_REQUEST_ID),
        retry_after=_retry_after(headers),
    )


def _guid_at(text: str, start: int) -> bool:
    for offset in range(_GUID_LENGTH):
        ch = text[start + offset]
        if offset in _GUID_HYPHENS:
            if ch != "-":
                return False
        elif ch not in _HEX_DIGITS:
            return False
    return True


def extract_uuid(text: Optional[str]) -> Optional[uuid.UUID]:
    """
    Return the first 8-4-4-4-12 hex GUID embedded in ``text``, or None.

    Scans left to right with a fixed grammar; surrounding text of any kind is ignored.
    """
    if not text:
        return None
    for start in range(len(text) - _GUID_LENGTH + 1):
        if text[start] in _HEX_DIGITS and _guid_at(text, start):
            return uuid.UUID(text[start:start + _GUID_LENGTH])
    return None


def created_id(response: requests.Response) -> uuid.UUID:
    """
    Extract the id of a newly created record from the ``OData-EntityId`` header.

    :raises ProtocolViolation: If the header is missing or embeds no GUID.
    """
    header = _header(response.headers, HEADER_ENTITY_ID)
    if header is None:
        raise ProtocolViolation("Dataverse provided no Uuid: OData-EntityId header missing", subcode=PROTOCOL_MISSING_ENTITY_ID)
    record_id = extract_uuid(header)
    if record_id is None:
        raise ProtocolViolation(
            f"Dataverse provided no Uuid: OData-EntityId header {header!r} contains no GUID",
            subcode=PROTOCOL_MISSING_ENTITY_ID,
        )
    return record_id


def read_json(response: requests.Response) -> Any:
    """
    :raises DecodingError: If the body is not valid JSON.
    """
    try:
        return response.json()
    except ValueError as exc:
        raise DecodingError(f"Response body is not valid JSON: {exc}") from exc


def decode_entity(entity_type: Any, payload: Any) -> Any:
    """
    Build an ``entity_type`` instance from a JSON object.

    :raises DecodingError: If the payload is not an object or ``decode()`` rejects it.
    """
    if not isinstance(payload, dict):
        raise DecodingError(f"Expected a JSON object for {entity_type.__name__}, got {type(payload).__name__}")
    try:
        return entity_type.decode(payload)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise DecodingError(f"Failed to decode {entity_type.__name__}: {exc!r}") from exc


def decode_collection(entity_type: Any, body: Any) -> Tuple[Tuple[Any, ...], Optional[str]]:
    """
    Decode a ``{"value": [...], "@odata.nextLink": ...}`` envelope.

    :return: The decoded entities and the continuation cursor (None on the last page).
    :raises DecodingError: If the envelope is malformed or an entity fails to decode.
    """
    if not isinstance(body, dict):
        raise DecodingError(f"Expected a JSON object envelope, got {type(body).__name__}")
    items = body.get(ODATA_VALUE)
    if not isinstance(items, list):
        raise DecodingError(f"Response envelope has no '{ODATA_VALUE}' array")
    next_link = body.get(ODATA_NEXT_LINK)
    if next_link is not None and not isinstance(next_link, str):
        raise DecodingError(f"'{ODATA_NEXT_LINK}' must be a string")
    entities = tuple(decode_entity(entity_type, item) for item in items)
    return entities, next_link

