"""
send_at formatting - scheduling value → provider UTC timestamp string.

Mandrill expects send_at in UTC as "YYYY-MM-DD HH:MM:SS".
"""
import logging
from datetime import date, datetime, time, timezone
from typing import Any, Optional

from mandrill_payload.config.constants import SEND_AT_FORMAT
from mandrill_payload.payload.errors import InvalidSendAtType

logger = logging.getLogger(__name__)


def format_send_at(value: Any) -> Optional[str]:
    """
    Normalize a send_at value.

    - None     → None
    - str      → returned unchanged (not validated)
    - datetime → converted to UTC; a naive datetime is taken as UTC
    - date     → midnight UTC of that day

    Raises:
        InvalidSendAtType: For any other type.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value

    # datetime subclasses date, so it is checked first
    if isinstance(value, datetime):
        moment = value
        if moment.utcoffset() is None:
            moment = moment.replace(tzinfo=timezone.utc)
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min, tzinfo=timezone.utc)
    else:
        logger.error("Unsupported send_at type: %s", type(value).__name__)
        raise InvalidSendAtType(value)

    return moment.astimezone(timezone.utc).strftime(SEND_AT_FORMAT)
