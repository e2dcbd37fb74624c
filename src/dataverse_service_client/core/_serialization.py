# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""JSON encoding of outgoing entity payloads."""

from __future__ import annotations

import datetime as _dt
import decimal
import json
import uuid
from typing import Any

from .errors import EncodingError


def _default(value: Any) -> Any:
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (_dt.datetime, _dt.date)):
        return value.isoformat()
    if isinstance(value, decimal.Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(payload: Any) -> str:
    """
    Serialize ``payload`` to a JSON string.

    :raises EncodingError: If the payload contains values JSON cannot represent.
    """
    try:
        return json.dumps(payload, default=_default, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"Failed to serialize payload: {exc}") from exc


def encode_entity(entity: Any) -> str:
    """
    Call ``entity.encode()`` and serialize the result.

    :raises EncodingError: If ``encode()`` fails or returns something JSON cannot represent.
    """
    try:
        payload = entity.encode()
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise EncodingError(f"Failed to encode {type(entity).__name__}: {exc}") from exc
    return dumps(payload)
