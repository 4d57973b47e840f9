"""
AddressField and AttachmentField - provider-shaped message fields.
"""
from dataclasses import dataclass
from typing import Literal

AddressType = Literal["to", "cc", "bcc", "from"]


@dataclass(frozen=True)
class AddressField:
    """One resolved recipient or sender address."""

    email: str
    name: str = ""           # empty when the address carries no display name
    type: AddressType = "to"

    def to_dict(self) -> dict:
        return {
            "email": self.email,
            "name": self.name,
            "type": self.type,
        }


@dataclass(frozen=True)
class AttachmentField:
    """A regular attachment or an inline image, content base64-encoded."""

    name: str                # filename for attachments, content-id for images
    type: str                # MIME type
    content: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type,
            "content": self.content,
        }

    def __repr__(self) -> str:
        return f"AttachmentField('{self.name}', {self.type}, {len(self.content)} b64 chars)"
