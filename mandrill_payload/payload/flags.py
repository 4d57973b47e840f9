"""
Flag and string readers for provider extension headers.

Tri-state fields distinguish an absent header (null) from one that is set;
a set header is true only for the exact, case-sensitive token "true".
`important` is the exception: it is plain boolean and absent means false.
"""
from typing import Optional

from mandrill_payload.config.constants import TRUE_TOKEN
from mandrill_payload.models.source_message import SourceMessage
from mandrill_payload.models.tri_state import TriState


def read_tri_state(message: SourceMessage, name: str) -> TriState:
    field = message.header(name)
    if field is None:
        return TriState.ABSENT
    if field.formatted_value() == TRUE_TOKEN:
        return TriState.TRUE
    return TriState.FALSE


def read_important(message: SourceMessage) -> bool:
    field = message.header("important")
    return field is not None and field.formatted_value() == TRUE_TOKEN


def read_string(message: SourceMessage, name: str) -> Optional[str]:
    """Rendered header value, or None when absent."""
    field = message.header(name)
    return field.formatted_value() if field is not None else None
