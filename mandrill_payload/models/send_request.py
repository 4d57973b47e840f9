"""
Typed Pydantic model for the messages/send request envelope.

The message struct itself stays a plain dict (its key set is fixed by
PAYLOAD_FIELDS); this model covers the send-time options that sit next to
it in the API call.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class SendRequest(BaseModel):
    """
    Body of a messages/send (or messages/send-template) call, minus the key.

    ``template_name`` switches the request to the send-template shape; when it
    is unset both template keys are left out of ``to_dict()``.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: dict = Field(..., description="Message struct built by to_payload().")
    async_: bool = Field(False, alias="async", description="Queue the send instead of sending inline.")
    ip_pool: Optional[str] = Field(None, description="Dedicated IP pool name.")
    send_at: Optional[str] = Field(None, description="UTC 'YYYY-MM-DD HH:MM:SS', caller string, or null.")
    template_name: Optional[str] = Field(None, description="Stored template slug.")
    template_content: Any = Field(None, description="Editable region contents for the template.")

    def to_dict(self) -> dict:
        data = {
            "message": self.message,
            "async": self.async_,
            "ip_pool": self.ip_pool,
            "send_at": self.send_at,
        }
        if self.template_name is not None:
            data["template_name"] = self.template_name
            data["template_content"] = self.template_content
        return data
