# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured exceptions raised by the Dataverse service client.

Every operation either returns its result or raises exactly one subclass of
:class:`DataverseError`. Lower-level exceptions (``requests``, ``azure-core``,
``json``) are chained as ``__cause__`` and never escape on their own.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from ._error_codes import PROTOCOL_NO_NEXT_PAGE


class DataverseError(Exception):
    """Base structured error for the Dataverse service client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat().replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class AuthenticationError(DataverseError):
    """A bearer token could not be acquired."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="authentication_error", details=details, source="client")


class TransportError(DataverseError):
    """The request never produced an HTTP response (network, timeout, TLS, bad URL)."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="transport_error", subcode=subcode, details=details, source="client")


class EncodingError(DataverseError):
    """An outgoing entity could not be serialized."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="encoding_error", details=details, source="client")


class DecodingError(DataverseError):
    """An incoming payload could not be deserialized."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="decoding_error", details=details, source="client")


class ValidationError(DataverseError):
    """The caller passed arguments the client can reject without a round trip."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class ServerError(DataverseError):
    """The service answered with a 4xx or 5xx status.

    ``message`` is the response body text, or a fixed fallback when the body
    could not be read.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        *,
        subcode: Optional[str] = None,
        is_transient: bool = False,
        service_error_code: Optional[str] = None,
        correlation_id: Optional[str] = None,
        request_id: Optional[str] = None,
        retry_after: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        if service_error_code is not None:
            d["service_error_code"] = service_error_code
        if correlation_id is not None:
            d["correlation_id"] = correlation_id
        if request_id is not None:
            d["request_id"] = request_id
        if retry_after is not None:
            d["retry_after"] = retry_after
        super().__init__(
            message,
            code="http_error",
            subcode=subcode,
            status_code=status_code,
            details=d,
            source="server",
            is_transient=is_transient,
        )


class ProtocolViolation(DataverseError):
    """The call succeeded but an expected response artifact was missing or malformed."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="protocol_violation", subcode=subcode, details=details, source="client")


class NoNextPage(ProtocolViolation):
    """Continuation was requested on a page that carries no cursor."""

    def __init__(self, message: str = "There is no next page to retrieve") -> None:
        super().__init__(message, subcode=PROTOCOL_NO_NEXT_PAGE)


__all__ = [
    "DataverseError",
    "AuthenticationError",
    "TransportError",
    "EncodingError",
    "DecodingError",
    "ValidationError",
    "ServerError",
    "ProtocolViolation",
    "NoNextPage",
]
