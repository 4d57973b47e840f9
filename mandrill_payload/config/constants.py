"""
Constants used across the payload adapter.
Field tables are pinned to the Mandrill messages/send message struct.
"""
from typing import List

# =============================================================================
# Recipient header fields (order is the order of the "to" array)
# =============================================================================
RECIPIENT_FIELDS: List[str] = ["to", "cc", "bcc"]

# =============================================================================
# Tri-state extension fields (absent -> null, "true" -> true, else false)
# =============================================================================
TRI_STATE_FIELDS: List[str] = [
    "auto_text",
    "auto_html",
    "inline_css",
    "merge",
    "preserve_recipients",
    "track_clicks",
    "track_opens",
    "url_strip_qs",
    "view_content_link",
]

# =============================================================================
# Plain string extension fields (absent -> null)
# =============================================================================
STRING_FIELDS: List[str] = [
    "bcc_address",
    "ip_pool",
    "merge_language",
    "return_path_domain",
    "signing_domain",
    "subaccount",
    "template",
    "tracking_domain",
]

# =============================================================================
# Extension fields read verbatim (structured values survive untouched)
# =============================================================================
RAW_VALUE_FIELDS: List[str] = [
    "global_merge_vars",
    "merge_vars",
    "metadata",
    "send_at",
    "template_content",
]

# =============================================================================
# Formats
# =============================================================================
TRUE_TOKEN: str = "true"
TAG_SEPARATOR: str = ", "
SEND_AT_FORMAT: str = "%Y-%m-%d %H:%M:%S"

# =============================================================================
# Message payload keys, in emission order
# =============================================================================
PAYLOAD_FIELDS: List[str] = [
    "auto_html",
    "auto_text",
    "bcc_address",
    "from_email",
    "from_name",
    "global_merge_vars",
    "headers",
    "html",
    "important",
    "inline_css",
    "merge",
    "merge_language",
    "merge_vars",
    "metadata",
    "preserve_recipients",
    "return_path_domain",
    "signing_domain",
    "subaccount",
    "subject",
    "tags",
    "text",
    "to",
    "track_clicks",
    "track_opens",
    "tracking_domain",
    "url_strip_qs",
    "view_content_link",
]

# Emitted only when non-empty; order matches classify_attachments (regular, inline)
CONDITIONAL_PAYLOAD_FIELDS: List[str] = ["attachments", "images"]
