"""
Tag parsing - comma-space separated header → list of tags.
"""
from typing import List, Optional

from mandrill_payload.config.constants import TAG_SEPARATOR


def parse_tags(value: Optional[str]) -> List[str]:
    """Split on ", " exactly; an absent or empty header gives an empty list."""
    if not value:
        return []
    return value.split(TAG_SEPARATOR)
