"""
Attachment classification - regular attachments vs inline images.

Mandrill takes inline (content-id referenced) parts in a separate "images"
array keyed by content-id; everything else goes to "attachments".
"""
import base64
import logging
from email.message import EmailMessage
from typing import List, Tuple

from mandrill_payload.models.fields import AttachmentField

logger = logging.getLogger(__name__)


def is_inline(part: EmailMessage) -> bool:
    """Inline disposition, or no disposition at all but a Content-ID."""
    disposition = part.get_content_disposition()
    if disposition == "inline":
        return True
    return disposition is None and part["Content-ID"] is not None


def content_id(part: EmailMessage) -> str:
    """Content-ID without its angle brackets."""
    return str(part["Content-ID"]).strip().strip("<>")


def encode_content(part: EmailMessage) -> str:
    payload = part.get_payload(decode=True) or b""
    return base64.b64encode(payload).decode("ascii")


def attachment_name(part: EmailMessage, inline: bool) -> str:
    """
    Name for the provider hash: content-id first for inline parts, filename
    first for regular ones. A part with neither gets an empty name.
    """
    cid = content_id(part) if part["Content-ID"] is not None else None
    filename = part.get_filename()
    candidates = (cid, filename) if inline else (filename, cid)
    return next((name for name in candidates if name), "")


def to_attachment_field(part: EmailMessage, inline: bool) -> AttachmentField:
    """Map one MIME part to the provider attachment hash."""
    name = attachment_name(part, inline)
    if not name:
        logger.warning("Attachment of type %s has no filename or content-id", part.get_content_type())
    return AttachmentField(
        name=name,
        type=part.get_content_type(),
        content=encode_content(part),
    )


def classify_attachments(
    parts: List[EmailMessage],
) -> Tuple[List[AttachmentField], List[AttachmentField]]:
    """
    Partition attachment parts into (regular, inline).

    Every part lands in exactly one of the two lists; order within each
    list follows the message.
    """
    regular: List[AttachmentField] = []
    inline: List[AttachmentField] = []
    for part in parts:
        if is_inline(part):
            inline.append(to_attachment_field(part, inline=True))
        else:
            regular.append(to_attachment_field(part, inline=False))

    logger.debug("Classified %d attachments: %d regular, %d inline",
                 len(parts), len(regular), len(inline))
    return regular, inline
