"""
Payload Assembler - main entry point for message → Mandrill payload.

Executes the assembly in stages:
    1. Extension fields (dispatch table; the only stage that can fail)
    2. Sender and recipients
    3. Headers and bodies
    4. Attachments / inline images (keys added only when non-empty)
    5. Schema validation (optional, settings.VALIDATE_PAYLOAD)

A fatal error in any stage aborts the call; no partial payload is returned.
"""
import logging
from typing import Any, Callable, Dict, Optional

from mandrill_payload.config import settings
from mandrill_payload.config.constants import (
    CONDITIONAL_PAYLOAD_FIELDS,
    PAYLOAD_FIELDS,
    RAW_VALUE_FIELDS,
    STRING_FIELDS,
    TRI_STATE_FIELDS,
)
from mandrill_payload.models.send_request import SendRequest
from mandrill_payload.models.source_message import SourceMessage
from mandrill_payload.payload.addresses import combine_recipients, resolve_sender
from mandrill_payload.payload.attachments import classify_attachments
from mandrill_payload.payload.errors import PayloadError
from mandrill_payload.payload.flags import read_important, read_string, read_tri_state
from mandrill_payload.payload.headers import collect_headers
from mandrill_payload.payload.raw_values import get_raw_value, parse_global_merge_vars
from mandrill_payload.payload.send_at import format_send_at
from mandrill_payload.payload.tags import parse_tags
from mandrill_payload.payload.validation import validate_payload, validate_send_request

logger = logging.getLogger(__name__)

ExtensionReader = Callable[[SourceMessage], Any]


# ======================================================================
# Extension field dispatch table
# ======================================================================

def _tri_state_reader(name: str) -> ExtensionReader:
    return lambda message: read_tri_state(message, name).to_json()


def _string_reader(name: str) -> ExtensionReader:
    return lambda message: read_string(message, name)


def _raw_reader(name: str) -> ExtensionReader:
    return lambda message: get_raw_value(message, name)


def _read_tags(message: SourceMessage) -> list:
    return parse_tags(read_string(message, "tags"))


def _read_global_merge_vars(message: SourceMessage) -> Any:
    return parse_global_merge_vars(get_raw_value(message, "global_merge_vars"))


def _read_send_at(message: SourceMessage) -> Optional[str]:
    return format_send_at(get_raw_value(message, "send_at"))


EXTENSION_READERS: Dict[str, ExtensionReader] = {
    **{name: _tri_state_reader(name) for name in TRI_STATE_FIELDS},
    **{name: _string_reader(name) for name in STRING_FIELDS},
    **{name: _raw_reader(name) for name in RAW_VALUE_FIELDS},
    "important": read_important,
    "tags": _read_tags,
    # raw fields that are decoded further
    "global_merge_vars": _read_global_merge_vars,
    "send_at": _read_send_at,
}


class PayloadAssembler:
    """Builds the Mandrill message struct for one SourceMessage."""

    def __init__(self, message: SourceMessage):
        self.message = message

    def resolve_extensions(self) -> Dict[str, Any]:
        """
        Read every recognised extension field.

        Raises:
            InvalidSendAtType: send_at is neither a string nor a date/time.
            MalformedMergeVarsJson: global_merge_vars is a non-JSON string.
        """
        return {name: reader(self.message) for name, reader in EXTENSION_READERS.items()}

    def body(self, subtype: str) -> Optional[str]:
        """
        Decoded text/<subtype> body.

        Multipart messages use their typed body part; a single-part message
        is used whole only if its own content type matches exactly.
        """
        if self.message.is_multipart:
            part = self.message.body_part(subtype)
            return part.get_content() if part is not None else None
        if self.message.mime_type == f"text/{subtype}":
            return self.message.decoded_body()
        return None

    def build(self, extensions: Optional[Dict[str, Any]] = None) -> dict:
        if extensions is None:
            extensions = self.resolve_extensions()

        sender = resolve_sender(self.message)
        html = self.body("html")
        text = self.body("plain")
        if html is not None:
            logger.debug("html body: %s", html[: settings.MAX_BODY_LOG_CHARS])

        message_fields = {
            "from_email": sender.email if sender else None,
            "from_name": (sender.name or None) if sender else None,
            "headers": collect_headers(self.message),
            "html": html,
            "subject": self.message.subject,
            "text": text,
            "to": [address.to_dict() for address in combine_recipients(self.message)],
        }
        payload = {
            key: message_fields[key] if key in message_fields else extensions[key]
            for key in PAYLOAD_FIELDS
        }

        classified = classify_attachments(self.message.attachments())
        for key, fields in zip(CONDITIONAL_PAYLOAD_FIELDS, classified):
            if fields:
                payload[key] = [field.to_dict() for field in fields]

        return payload


# ======================================================================
# Public entry points
# ======================================================================

def _check(result, what: str) -> None:
    if not result.valid:
        logger.error("%s failed validation: %s", what, result.errors)
        raise PayloadError(f"{what} failed validation: {result.errors}")


def to_payload(message: SourceMessage, validate: Optional[bool] = None) -> dict:
    """
    Convert a SourceMessage into the Mandrill message struct.

    Args:
        message: Already-composed source message (not mutated).
        validate: Check the result against MESSAGE_PAYLOAD_SCHEMA.
                  Defaults to settings.VALIDATE_PAYLOAD.

    Returns:
        Dict with every key of PAYLOAD_FIELDS, plus "attachments" and
        "images" when the message has any.

    Raises:
        InvalidSendAtType, MalformedMergeVarsJson: Bad extension values.
        PayloadError: Schema validation failed.
    """
    if validate is None:
        validate = settings.VALIDATE_PAYLOAD

    payload = PayloadAssembler(message).build()
    if validate:
        _check(validate_payload(payload), "Message payload")

    logger.info(
        "Payload assembled: %d recipients, %d attachments, %d images",
        len(payload["to"]),
        len(payload.get("attachments", [])),
        len(payload.get("images", [])),
    )
    return payload


def build_send_request(
    message: SourceMessage,
    async_: Optional[bool] = None,
    validate: Optional[bool] = None,
) -> dict:
    """
    Wrap the message struct in a messages/send request body.

    The send-time extension fields (ip_pool, send_at, template,
    template_content) go next to the message; a named template turns the
    request into the send-template shape.
    """
    if async_ is None:
        async_ = settings.SEND_ASYNC
    if validate is None:
        validate = settings.VALIDATE_PAYLOAD

    assembler = PayloadAssembler(message)
    extensions = assembler.resolve_extensions()
    payload = assembler.build(extensions)

    request = SendRequest(
        message=payload,
        async_=async_,
        ip_pool=extensions["ip_pool"],
        send_at=extensions["send_at"],
        template_name=extensions["template"],
        template_content=extensions["template_content"],
    ).to_dict()

    if validate:
        _check(validate_send_request(request), "Send request")

    logger.info(
        "Send request assembled: template=%s send_at=%s",
        request.get("template_name"),
        request["send_at"],
    )
    return request
