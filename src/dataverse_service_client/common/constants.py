# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Protocol constants for the Dataverse Web API.

These values are fixed by the service and are not configurable per client.
"""

# Web API version segment used in every URL: {base}/api/data/v{VERSION}/...
VERSION = "9.2"

# OData protocol version markers sent on every request
ODATA_MAX_VERSION = "4.0"
ODATA_VERSION = "4.0"

# Header names
HEADER_ENTITY_ID = "OData-EntityId"
HEADER_IF_MATCH = "If-Match"
HEADER_CLIENT_REQUEST_ID = "x-ms-client-request-id"
HEADER_CORRELATION_ID = "x-ms-correlation-request-id"
HEADER_SERVICE_REQUEST_ID = "x-ms-service-request-id"
HEADER_RETRY_AFTER = "Retry-After"

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_HTTP = "application/http"
CONTENT_TYPE_BATCH = "multipart/mixed; boundary=batch_{batch_id}"

# OData response envelope keys
ODATA_VALUE = "value"
ODATA_NEXT_LINK = "@odata.nextLink"

# Special collection segments
BATCH_SEGMENT = "$batch"
MERGE_ACTION = "Merge"

# Message used when the body of a failed response cannot be read; an empty body stays ""
FALLBACK_ERROR_MESSAGE = "no error details provided from server"

# Minimum remaining validity (seconds) of every token handed out by an authenticator
TOKEN_REFRESH_MARGIN_SECONDS = 120

# Default connect and overall timeouts (seconds)
DEFAULT_HTTP_TIMEOUT = 120.0
DEFAULT_HTTP_CONNECT_TIMEOUT = 120.0
