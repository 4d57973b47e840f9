"""
Shared test fixtures for the payload adapter test suite.
"""
from email import policy
from email.message import EmailMessage

import pytest

from mandrill_payload.models.source_message import SourceMessage


# ==========================================================================
# Raw EmailMessage builders
# ==========================================================================

def make_email(
    from_addr: str | None = "Sender Name <sender@example.com>",
    to: str | None = "Jane Doe <jane@x.com>, bob@x.com",
    subject: str = "Quarterly report",
    body: str = "Hello",
    subtype: str = "plain",
) -> EmailMessage:
    msg = EmailMessage(policy=policy.default)
    if from_addr is not None:
        msg["From"] = from_addr
    if to is not None:
        msg["To"] = to
    msg["Subject"] = subject
    msg.set_content(body, subtype=subtype)
    return msg


@pytest.fixture
def plain_email():
    return make_email()


@pytest.fixture
def multipart_email():
    """text + html alternative, an inline logo, and a PDF attachment."""
    msg = make_email(body="Plain body")
    msg.add_alternative('<p>Html body <img src="cid:logo@example.com"></p>', subtype="html")
    html_part = msg.get_payload()[1]
    html_part.add_related(
        b"\x89PNG-logo-bytes",
        maintype="image",
        subtype="png",
        cid="<logo@example.com>",
    )
    msg.add_attachment(
        b"%PDF-1.4 report",
        maintype="application",
        subtype="pdf",
        filename="report.pdf",
    )
    return msg


# ==========================================================================
# SourceMessage wrappers
# ==========================================================================

@pytest.fixture
def plain_message(plain_email):
    return SourceMessage(plain_email)


@pytest.fixture
def multipart_message(multipart_email):
    return SourceMessage(multipart_email)


# ==========================================================================
# Extension values
# ==========================================================================

@pytest.fixture
def merge_vars():
    return [
        {
            "rcpt": "jane@x.com",
            "vars": [{"name": "FIRST_NAME", "content": "Jane"}],
        },
    ]


@pytest.fixture
def global_merge_vars():
    return [
        {"name": "FIRST_NAME", "content": "Jane"},
        {"name": "LAST_NAME", "content": "Doe"},
        {"name": "COMPANY", "content": "Example Corp"},
        {"name": "PLAN", "content": "Premium yearly"},
    ]


@pytest.fixture
def email_factory():
    """Factory for EmailMessage variants (see make_email for defaults)."""
    return make_email
