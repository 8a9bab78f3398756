# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# HTTP subcodes
def http_subcode(status_code: int) -> str:
    """Return the ``http_<status>`` subcode for a status code."""
    return f"http_{status_code}"


HTTP_404 = http_subcode(404)
HTTP_429 = http_subcode(429)
HTTP_500 = http_subcode(500)

# Transport subcodes
TRANSPORT_TIMEOUT = "transport_timeout"
TRANSPORT_CONNECTION = "transport_connection"
TRANSPORT_FAILURE = "transport_failure"

# Configuration subcodes
CONFIG_BASE_URL_MISSING = "config_base_url_missing"
CONFIG_ENDPOINT_MISSING = "config_endpoint_missing"
CONFIG_CONTEXT_CLOSED = "config_context_closed"
CONFIG_INVALID_VALUE = "config_invalid_value"

# Translation subcodes
TRANSLATION_UNSUPPORTED_PREDICATE = "translation_unsupported_predicate"
TRANSLATION_UNSUPPORTED_OPERATOR = "translation_unsupported_operator"
TRANSLATION_UNSUPPORTED_LITERAL = "translation_unsupported_literal"
TRANSLATION_INVALID_PROPERTY = "translation_invalid_property"
TRANSLATION_UNSUPPORTED_NODE = "translation_unsupported_node"

# Decode subcodes
DECODE_INVALID_JSON = "decode_invalid_json"
DECODE_ENVELOPE_MISSING = "decode_envelope_missing"
DECODE_ENVELOPE_UNEXPECTED = "decode_envelope_unexpected"
DECODE_UNEXPECTED_SHAPE = "decode_unexpected_shape"
DECODE_ENTITY_INVALID = "decode_entity_invalid"

# Validation subcodes
VALIDATION_ID_MISSING = "validation_id_missing"
VALIDATION_ENTITY_TYPE = "validation_entity_type"
