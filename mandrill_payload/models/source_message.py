"""
SourceMessage and HeaderField - read-only view over a composed email.

The host representation is a stdlib ``email.message.EmailMessage``. Provider
extension fields that carry structured values (merge vars, metadata,
scheduling times) cannot live in a MIME header without being stringified,
so the caller may hand them over separately as ``extensions``; they behave
like headers appended after the message's own.
"""
import email
import json
import logging
import re
from dataclasses import dataclass
from datetime import date
from email import policy
from email.header import decode_header, make_header
from email.message import EmailMessage
from typing import Any, Iterator, List, Mapping, Optional

logger = logging.getLogger(__name__)

_ENCODED_WORD = re.compile(r"=\?[^?\s]+\?[bBqQ]\?[^?\s]*\?=")
_TRAILING_ENCODED_WORD = re.compile(_ENCODED_WORD.pattern + r"[ \t]*$")
_FOLD = re.compile(r"(\r\n|\r|\n)")


def render_value(value: Any) -> str:
    """Stringify an extension value the way it would be written to a header."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def decode_folded(raw: str) -> str:
    """
    Decode RFC 2047 encoded words in a stored header value, keeping its folds.

    Each folded line is decoded on its own. The whitespace that opens a
    continuation line is dropped only when it sits between two encoded
    words; line breaks are left in place.
    """
    if not _ENCODED_WORD.search(raw):
        return raw

    decoded: List[str] = []
    after_encoded_word = False
    for index, piece in enumerate(_FOLD.split(raw)):
        if index % 2:
            decoded.append(piece)
            continue
        text = piece.lstrip(" \t")
        if not _ENCODED_WORD.search(text):
            decoded.append(piece)
            after_encoded_word = False
            continue
        if not (after_encoded_word and _ENCODED_WORD.match(text)):
            decoded.append(piece[: len(piece) - len(text)])
        decoded.append(_decode_line(text))
        after_encoded_word = _TRAILING_ENCODED_WORD.search(text) is not None
    return "".join(decoded)


def _decode_line(text: str) -> str:
    try:
        return str(make_header(decode_header(text)))
    except (LookupError, UnicodeError) as e:
        logger.warning("Keeping undecodable header text %r: %s", text, e)
        return text


@dataclass(frozen=True)
class HeaderField:
    """A single header with both its rendered and its verbatim value."""

    name: str
    raw: Any
    rendered: str

    def formatted_value(self) -> str:
        """Value as the host library renders it (decoded, unfolded string)."""
        return self.rendered

    def original_value(self) -> Any:
        """
        Value as supplied, before any host-side parsing.

        Extension values come back as the caller's object. Headers from the
        MIME source come back as their stored text with encoded words
        decoded and folding line breaks still in place.
        """
        return self.raw


class SourceMessage:
    """Read-only adapter over an EmailMessage plus extension fields."""

    def __init__(
        self,
        message: EmailMessage,
        extensions: Optional[Mapping[str, Any]] = None,
    ):
        self._message = message
        self._extensions = dict(extensions or {})

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        extensions: Optional[Mapping[str, Any]] = None,
    ) -> "SourceMessage":
        """Parse raw RFC 5322 bytes with the modern email policy."""
        message = email.message_from_bytes(data, policy=policy.default)
        return cls(message, extensions)

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    def header_fields(self) -> List[HeaderField]:
        """All header fields in declaration order, extensions last."""
        fields = [
            self._message_field(name, raw)
            for name, raw in self._message.raw_items()
        ]
        fields.extend(
            HeaderField(name=name, raw=value, rendered=render_value(value))
            for name, value in self._extensions.items()
        )
        return fields

    def header(self, name: str) -> Optional[HeaderField]:
        """
        Look up a header by name (case-insensitive).

        Extension fields shadow message headers of the same name; among
        message headers the first occurrence wins.
        """
        wanted = name.lower()
        for key, value in self._extensions.items():
            if key.lower() == wanted:
                return HeaderField(name=key, raw=value, rendered=render_value(value))
        for key, raw in self._message.raw_items():
            if key.lower() == wanted:
                return self._message_field(key, raw)
        return None

    def address_values(self, name: str) -> List[str]:
        """Formatted values of every occurrence of an address header."""
        return [str(value) for value in self._message.get_all(name, [])]

    def _message_field(self, name: str, raw: Any) -> HeaderField:
        parsed = self._message.policy.header_fetch_parse(name, raw)
        # Programmatically set headers are stored as header objects already.
        original = decode_folded(raw) if type(raw) is str else str(raw)
        return HeaderField(name=name, raw=original, rendered=str(parsed))

    # ------------------------------------------------------------------
    # Body
    # ------------------------------------------------------------------

    @property
    def subject(self) -> Optional[str]:
        value = self._message["Subject"]
        return str(value) if value is not None else None

    @property
    def mime_type(self) -> str:
        return self._message.get_content_type()

    @property
    def is_multipart(self) -> bool:
        return self._message.is_multipart()

    def body_part(self, subtype: str) -> Optional[EmailMessage]:
        """First non-attachment text/<subtype> part of the body tree."""
        return self._message.get_body(preferencelist=(subtype,))

    def decoded_body(self) -> str:
        """Whole single-part body, transfer-decoded."""
        return self._message.get_content()

    # ------------------------------------------------------------------
    # Attachments
    # ------------------------------------------------------------------

    def attachments(self) -> List[EmailMessage]:
        return list(self._iter_attachments())

    def _iter_attachments(self) -> Iterator[EmailMessage]:
        for part in self._message.walk():
            if part.is_multipart():
                continue
            if (
                part.get_content_disposition() == "attachment"
                or part.get_filename()
                or part["Content-ID"]
            ):
                yield part
