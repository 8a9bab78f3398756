# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Wire-level constants shared by the translators, transport and collections.
"""

# REST convention query parameters
REST_PARAM_SEARCH = "search"
REST_PARAM_SORT = "sort"
REST_PARAM_PAGE_INDEX = "pageIndex"
REST_PARAM_PAGE_SIZE = "pageSize"

# OData convention query parameters
ODATA_PARAM_FILTER = "$filter"
ODATA_PARAM_ORDERBY = "$orderby"
ODATA_PARAM_SKIP = "$skip"
ODATA_PARAM_TOP = "$top"

# Characters left unescaped in translated query strings
QUERY_SAFE_CHARS = "$,'()"

# Fixed literal format for date/datetime values (yyyy-MM-ddTHH:mm:ss)
DATE_LITERAL_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Response envelope
ENVELOPE_DATA_KEY = "data"

# Request headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_ACCEPT = "Accept"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"
HEADER_CLIENT_REQUEST_ID = "X-Client-Request-Id"
HEADER_RETRY_AFTER = "Retry-After"
HEADER_REQUEST_ID = "X-Request-Id"

CONTENT_TYPE_JSON = "application/json"

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "apiqueryable/0.1.0"

# Status codes worth surfacing as transient to callers
TRANSIENT_STATUS_CODES = frozenset({429, 502, 503, 504})
