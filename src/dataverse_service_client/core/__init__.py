# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Dataverse service client.

This module contains the foundational components including authentication,
configuration, HTTP transport, and error handling.
"""

from .auth import Authenticator, ClientSecretAuth, NoAuth, TokenCredentialAuth
from .config import DataverseConfig
from .errors import (
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

__all__ = [
    "Authenticator",
    "ClientSecretAuth",
    "NoAuth",
    "TokenCredentialAuth",
    "DataverseConfig",
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
