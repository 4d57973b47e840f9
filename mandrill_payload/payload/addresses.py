"""
Address resolution - header address lists → provider address hashes.

Splits each "Display Name <email>" entry into its two parts. The recipient
list flattens to, cc and bcc in that order, each entry tagged with the
header it came from.
"""
import logging
from email.utils import getaddresses
from typing import List, Optional

from mandrill_payload.config.constants import RECIPIENT_FIELDS
from mandrill_payload.models.fields import AddressField
from mandrill_payload.models.source_message import SourceMessage

logger = logging.getLogger(__name__)


def resolve_address_field(message: SourceMessage, name: str) -> List[AddressField]:
    """
    Parse every occurrence of an address header into AddressField entries.

    Args:
        message: Source message.
        name: Header name ("to", "cc", "bcc", "from").

    Returns:
        Addresses in header order; empty list when the header is absent.
    """
    values = message.address_values(name)
    if not values:
        return []

    field_type = name.lower()
    resolved: List[AddressField] = []
    for display_name, address in getaddresses(values):
        if not address:
            logger.debug("Skipping %s entry without an address part", field_type)
            continue
        resolved.append(AddressField(email=address, name=display_name, type=field_type))
    return resolved


def combine_recipients(message: SourceMessage) -> List[AddressField]:
    """Flatten to, cc and bcc into one list, grouped by field."""
    recipients: List[AddressField] = []
    for field_name in RECIPIENT_FIELDS:
        recipients.extend(resolve_address_field(message, field_name))
    return recipients


def resolve_sender(message: SourceMessage) -> Optional[AddressField]:
    """First address of the From header, or None when there is none."""
    senders = resolve_address_field(message, "from")
    if len(senders) > 1:
        logger.debug("From header lists %d addresses, using the first", len(senders))
    return senders[0] if senders else None
