"""
Payload validation - JSON Schema conformance plus quality warnings.

Schema violations make the payload invalid; quality checks only warn,
since Mandrill accepts e.g. a template send without any body.
"""
import logging
from typing import List

from jsonschema import ValidationError, validate

from mandrill_payload.config.schemas import MESSAGE_PAYLOAD_SCHEMA, SEND_REQUEST_SCHEMA
from mandrill_payload.models.validation import ValidationResult

logger = logging.getLogger(__name__)


def _quality_warnings(payload: dict) -> List[str]:
    warnings: List[str] = []
    if not payload.get("to"):
        warnings.append("Message has no recipients")
    if payload.get("from_email") is None:
        warnings.append("Message has no From address")
    if payload.get("html") is None and payload.get("text") is None:
        warnings.append("Message has neither an html nor a text body")
    return warnings


def validate_payload(payload: dict) -> ValidationResult:
    """
    Check a message payload against MESSAGE_PAYLOAD_SCHEMA.

    Returns:
        ValidationResult with valid flag, errors, warnings and the payload.
    """
    try:
        validate(instance=payload, schema=MESSAGE_PAYLOAD_SCHEMA)
    except ValidationError as e:
        return ValidationResult(valid=False, errors=[f"Schema violation: {e.message}"])

    warnings = _quality_warnings(payload)
    for warning in warnings:
        logger.warning(warning)
    return ValidationResult(valid=True, warnings=warnings, data=payload)


def validate_send_request(request: dict) -> ValidationResult:
    """Check a send request envelope (message included) against SEND_REQUEST_SCHEMA."""
    try:
        validate(instance=request, schema=SEND_REQUEST_SCHEMA)
    except ValidationError as e:
        return ValidationResult(valid=False, errors=[f"Schema violation: {e.message}"])
    return ValidationResult(valid=True, data=request)
