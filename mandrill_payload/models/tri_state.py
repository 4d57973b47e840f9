"""
TriState - optional boolean read from a custom header.
"""
from enum import Enum
from typing import Optional


class TriState(Enum):
    """Unset, true or false; unset must stay distinguishable from false."""

    ABSENT = "absent"
    TRUE = "true"
    FALSE = "false"

    def to_json(self) -> Optional[bool]:
        if self is TriState.ABSENT:
            return None
        return self is TriState.TRUE
