# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Error subcode constants attached to :class:`~dataverse_service_client.core.errors.DataverseError`."""

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_403 = "http_403"
HTTP_404 = "http_404"
HTTP_409 = "http_409"
HTTP_412 = "http_412"
HTTP_415 = "http_415"
HTTP_429 = "http_429"
HTTP_500 = "http_500"
HTTP_502 = "http_502"
HTTP_503 = "http_503"
HTTP_504 = "http_504"

# Statuses the service documents as transient. Informational only: nothing retries.
TRANSIENT_STATUS_CODES = frozenset({429, 502, 503, 504})

# Protocol subcodes
PROTOCOL_MISSING_ENTITY_ID = "missing_entity_id"
PROTOCOL_NO_NEXT_PAGE = "no_next_page"

# Transport subcodes
TRANSPORT_TIMEOUT = "timeout"
TRANSPORT_CONNECTION = "connection"
TRANSPORT_INSECURE_URL = "insecure_url"

# Validation subcodes
VALIDATION_EMPTY_COLUMNS = "validation_empty_columns"
VALIDATION_INVALID_LIMIT = "validation_invalid_limit"
VALIDATION_MISSING_ENTITY_TYPE = "validation_missing_entity_type"
VALIDATION_BASE_URL_MISMATCH = "validation_base_url_mismatch"


def http_subcode(status_code: int) -> str:
    """Return the ``http_<status>`` subcode for a response status."""
    return f"http_{status_code}"
