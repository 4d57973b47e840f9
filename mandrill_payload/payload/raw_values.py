"""
Raw value extraction - verbatim extension field values.

Structured extension values (merge vars, metadata, template content, send
times) must reach the payload exactly as the caller supplied them, not as
the header's rendered string. When structure could not survive (the value
travelled through a real MIME header), global_merge_vars is expected to be
a JSON document; it is parsed as JSON and never evaluated.
"""
import json
import logging
import re
from typing import Any, Optional

from mandrill_payload.models.source_message import SourceMessage
from mandrill_payload.payload.errors import MalformedMergeVarsJson

logger = logging.getLogger(__name__)

# Header folding inserts line breaks into long values; nothing else is stripped.
_LINE_BREAKS = re.compile(r"[\r\n]")


def get_raw_value(message: SourceMessage, name: str) -> Optional[Any]:
    """Original value of a header, or None if the header does not exist."""
    field = message.header(name)
    if field is None:
        return None
    return field.original_value()


def parse_global_merge_vars(value: Optional[Any]) -> Optional[Any]:
    """
    Decode global_merge_vars when it arrived as a string.

    Non-string values (including None) pass through untouched. Strings have
    every CR/LF removed and are then parsed as JSON.

    Raises:
        MalformedMergeVarsJson: The cleaned string is not valid JSON.
    """
    if not isinstance(value, str):
        return value

    cleaned = _LINE_BREAKS.sub("", value)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("global_merge_vars is not valid JSON: %s", e)
        raise MalformedMergeVarsJson(value, str(e)) from e
