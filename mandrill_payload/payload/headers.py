"""
Header collection - message header fields → flat name/value map.
"""
from typing import Dict

from mandrill_payload.models.source_message import SourceMessage


def collect_headers(message: SourceMessage) -> Dict[str, str]:
    """
    Reduce the ordered header fields to a dict.

    Duplicate names are not merged: a later field overwrites an earlier one.
    """
    headers: Dict[str, str] = {}
    for field in message.header_fields():
        headers[field.name] = field.formatted_value()
    return headers
