"""
Errors raised while assembling a payload.

Only two extension fields can make an assembly fail; every other accessor
maps absence to null/empty and never raises.
"""


class PayloadError(Exception):
    """Base class for fatal payload assembly failures."""


class InvalidSendAtType(PayloadError, TypeError):
    """send_at holds neither a string nor a date/time value."""

    def __init__(self, value: object):
        super().__init__(
            f"send_at should be datetime/date or str, got {type(value).__name__}"
        )
        self.value = value


class MalformedMergeVarsJson(PayloadError, ValueError):
    """global_merge_vars is a string that does not parse as JSON."""

    def __init__(self, raw: str, reason: str):
        super().__init__(f"global_merge_vars is not valid JSON: {reason}")
        self.raw = raw
