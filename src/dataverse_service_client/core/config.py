# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ..common.constants import DEFAULT_HTTP_CONNECT_TIMEOUT, DEFAULT_HTTP_TIMEOUT

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class DataverseConfig:
    """
    Configuration settings for Dataverse client operations.

    Values are fixed for the lifetime of a client; nothing is configurable per call.

    :param http_timeout: Overall request timeout in seconds (default: 120).
    :type http_timeout: float
    :param http_connect_timeout: Connection establishment timeout in seconds (default: 120).
    :type http_connect_timeout: float
    :param https_only: Refuse to send requests to non-HTTPS URLs (default: True).
    :type https_only: bool
    :param logger_name: Name of the :mod:`logging` logger used for request logs.
    :type logger_name: str
    """

    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    http_connect_timeout: float = DEFAULT_HTTP_CONNECT_TIMEOUT
    https_only: bool = True
    logger_name: str = "dataverse_service_client"

    def __post_init__(self) -> None:
        if self.http_timeout <= 0:
            raise ValueError("http_timeout must be positive")
        if self.http_connect_timeout <= 0:
            raise ValueError("http_connect_timeout must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DataverseConfig":
        """
        Create a configuration instance from environment variables.

        Recognised variables: ``DATAVERSE_HTTP_TIMEOUT``, ``DATAVERSE_HTTP_CONNECT_TIMEOUT``
        and ``DATAVERSE_HTTPS_ONLY``. Unset variables keep their defaults.

        :param environ: Mapping to read instead of :data:`os.environ` (useful in tests).
        :return: Configuration instance.
        :rtype: ~dataverse_service_client.core.config.DataverseConfig
        :raises ValueError: If a variable is set to an unparsable value.
        """
        env = os.environ if environ is None else environ
        return cls(
            http_timeout=_float_var(env, "DATAVERSE_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
            http_connect_timeout=_float_var(env, "DATAVERSE_HTTP_CONNECT_TIMEOUT", DEFAULT_HTTP_CONNECT_TIMEOUT),
            https_only=_bool_var(env, "DATAVERSE_HTTPS_ONLY", True),
        )


def _float_var(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _bool_var(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")
