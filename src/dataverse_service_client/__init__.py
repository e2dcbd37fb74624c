# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Typed client for the Microsoft Dataverse Web API.

Translates create, update, upsert, delete and retrieve operations on caller-defined
entity types into authenticated OData requests, with cursor pagination, batch
execution and record merging.
"""

from .client import DataverseClient
from .core.auth import Authenticator, ClientSecretAuth, NoAuth, TokenCredentialAuth
from .core.config import DataverseConfig
from .core.errors import (
    AuthenticationError,
    DataverseError,
    DecodingError,
    EncodingError,
    NoNextPage,
    ProtocolViolation,
    ServerError,
    TransportError,
    ValidationError,
)
from .models import Batch, MergeRequest, Page, Query, ReadEntity, Reference, WriteEntity

__all__ = [
    "DataverseClient",
    "DataverseConfig",
    "Authenticator",
    "ClientSecretAuth",
    "NoAuth",
    "TokenCredentialAuth",
    "Batch",
    "MergeRequest",
    "Page",
    "Query",
    "ReadEntity",
    "Reference",
    "WriteEntity",
    "AuthenticationError",
    "DataverseError",
    "DecodingError",
    "EncodingError",
    "NoNextPage",
    "ProtocolViolation",
    "ServerError",
    "TransportError",
    "ValidationError",
]
