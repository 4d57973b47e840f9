"""
JSON Schemas for the adapter output.

Two schemas:
1. MESSAGE_PAYLOAD_SCHEMA - the Mandrill "message" struct produced by to_payload
2. SEND_REQUEST_SCHEMA    - the messages/send envelope wrapping it

Nullable scalars are typed as ["<type>", "null"]; the two attachment
collections are optional but, when present, never empty.
"""
from mandrill_payload.config.constants import CONDITIONAL_PAYLOAD_FIELDS, PAYLOAD_FIELDS

_NULLABLE_STRING: dict = {"type": ["string", "null"]}
_NULLABLE_BOOLEAN: dict = {"type": ["boolean", "null"]}

_ADDRESS_ITEM: dict = {
    "type": "object",
    "additionalProperties": False,
    "required": ["email", "name", "type"],
    "properties": {
        "email": {"type": "string"},
        "name": {"type": "string"},
        "type": {"type": "string", "enum": ["to", "cc", "bcc"]},
    },
}

_ATTACHMENT_LIST: dict = {
    "type": "array",
    "minItems": 1,
    "items": {
        "type": "object",
        "additionalProperties": False,
        "required": ["name", "type", "content"],
        "properties": {
            "name": {"type": "string"},
            "type": {"type": "string"},
            "content": {"type": "string"},
        },
    },
}


# =============================================================================
# 1. Message payload schema
# =============================================================================
MESSAGE_PAYLOAD_SCHEMA: dict = {
    "type": "object",
    "additionalProperties": False,
    "required": PAYLOAD_FIELDS,
    "properties": {
        "auto_html": _NULLABLE_BOOLEAN,
        "auto_text": _NULLABLE_BOOLEAN,
        "bcc_address": _NULLABLE_STRING,
        "from_email": _NULLABLE_STRING,
        "from_name": _NULLABLE_STRING,
        "global_merge_vars": {},
        "headers": {
            "type": "object",
            "additionalProperties": {"type": "string"},
        },
        "html": _NULLABLE_STRING,
        "important": {"type": "boolean"},
        "inline_css": _NULLABLE_BOOLEAN,
        "merge": _NULLABLE_BOOLEAN,
        "merge_language": _NULLABLE_STRING,
        "merge_vars": {},
        "metadata": {},
        "preserve_recipients": _NULLABLE_BOOLEAN,
        "return_path_domain": _NULLABLE_STRING,
        "signing_domain": _NULLABLE_STRING,
        "subaccount": _NULLABLE_STRING,
        "subject": _NULLABLE_STRING,
        "tags": {"type": "array", "items": {"type": "string"}},
        "text": _NULLABLE_STRING,
        "to": {"type": "array", "items": _ADDRESS_ITEM},
        "track_clicks": _NULLABLE_BOOLEAN,
        "track_opens": _NULLABLE_BOOLEAN,
        "tracking_domain": _NULLABLE_STRING,
        "url_strip_qs": _NULLABLE_BOOLEAN,
        "view_content_link": _NULLABLE_BOOLEAN,
        **{name: _ATTACHMENT_LIST for name in CONDITIONAL_PAYLOAD_FIELDS},
    },
}


# =============================================================================
# 2. Send request envelope schema (messages/send, messages/send-template)
# =============================================================================
SEND_REQUEST_SCHEMA: dict = {
    "type": "object",
    "additionalProperties": False,
    "required": ["message", "async", "ip_pool", "send_at"],
    "properties": {
        "message": MESSAGE_PAYLOAD_SCHEMA,
        "async": {"type": "boolean"},
        "ip_pool": _NULLABLE_STRING,
        "send_at": {
            "type": ["string", "null"],
        },
        "template_name": {"type": "string"},
        "template_content": {},
    },
}
