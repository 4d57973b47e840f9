"""
Unit tests for payload assembly (to_payload, build_send_request).
"""
import base64
from datetime import date, datetime, timezone

import pytest

from mandrill_payload.config.constants import (
    CONDITIONAL_PAYLOAD_FIELDS,
    PAYLOAD_FIELDS,
    RAW_VALUE_FIELDS,
    STRING_FIELDS,
    TRI_STATE_FIELDS,
)
from mandrill_payload.models.source_message import SourceMessage
from mandrill_payload.payload.assembler import (
    EXTENSION_READERS,
    PayloadAssembler,
    build_send_request,
    to_payload,
)
from mandrill_payload.payload.errors import InvalidSendAtType, MalformedMergeVarsJson


class TestToPayloadShape:
    """Tests for the fixed key set and the conditional keys."""

    def test_fixed_keys_in_order(self, plain_message):
        payload = to_payload(plain_message)
        assert list(payload) == PAYLOAD_FIELDS

    def test_defaults_without_custom_headers(self, plain_message):
        payload = to_payload(plain_message)

        for name in TRI_STATE_FIELDS:
            assert payload[name] is None, name
        assert payload["tags"] == []
        assert payload["important"] is False
        assert payload["global_merge_vars"] is None
        assert payload["merge_vars"] is None
        assert payload["metadata"] is None
        assert "attachments" not in payload
        assert "images" not in payload

    def test_sender_and_recipients(self, plain_message):
        payload = to_payload(plain_message)

        assert payload["from_email"] == "sender@example.com"
        assert payload["from_name"] == "Sender Name"
        assert payload["subject"] == "Quarterly report"
        assert payload["to"] == [
            {"email": "jane@x.com", "name": "Jane Doe", "type": "to"},
            {"email": "bob@x.com", "name": "", "type": "to"},
        ]

    def test_from_name_null_without_display_name(self, email_factory):
        payload = to_payload(SourceMessage(email_factory(from_addr="sender@example.com")))
        assert payload["from_email"] == "sender@example.com"
        assert payload["from_name"] is None

    def test_does_not_mutate_message(self, multipart_email):
        headers_before = list(multipart_email.items())
        parts_before = [p.get_content_type() for p in multipart_email.walk()]

        to_payload(SourceMessage(multipart_email, {"tags": "a, b"}))

        assert list(multipart_email.items()) == headers_before
        assert [p.get_content_type() for p in multipart_email.walk()] == parts_before
        assert "tags" not in multipart_email


class TestBodies:
    """Tests for html/text selection."""

    def test_single_part_plain(self, plain_message):
        payload = to_payload(plain_message)
        assert payload["text"].strip() == "Hello"
        assert payload["html"] is None

    def test_single_part_html(self, email_factory):
        msg = email_factory(body="<p>Hi</p>", subtype="html")
        payload = to_payload(SourceMessage(msg))
        assert payload["html"].strip() == "<p>Hi</p>"
        assert payload["text"] is None

    def test_multipart_uses_typed_parts(self, multipart_message):
        payload = to_payload(multipart_message)
        assert payload["text"].strip() == "Plain body"
        assert "Html body" in payload["html"]

    def test_multipart_without_html(self, email_factory):
        msg = email_factory(body="only text")
        msg.add_attachment(b"data", maintype="application", subtype="octet-stream", filename="x.bin")
        payload = to_payload(SourceMessage(msg))
        assert payload["html"] is None
        assert payload["text"].strip() == "only text"


class TestAttachmentsAndImages:
    """Tests for the conditional attachments/images keys."""

    def test_one_of_each(self, multipart_message):
        payload = to_payload(multipart_message)

        assert payload["attachments"] == [
            {
                "name": "report.pdf",
                "type": "application/pdf",
                "content": base64.b64encode(b"%PDF-1.4 report").decode("ascii"),
            },
        ]
        assert len(payload["images"]) == 1
        assert payload["images"][0]["name"] == "logo@example.com"
        assert payload["images"][0]["type"] == "image/png"

    def test_only_regular_attachment(self, email_factory):
        msg = email_factory()
        msg.add_attachment(b"a,b\n1,2", maintype="application", subtype="octet-stream", filename="data.csv")
        payload = to_payload(SourceMessage(msg))

        assert [a["name"] for a in payload["attachments"]] == ["data.csv"]
        assert "images" not in payload

    def test_unnamed_attachment_gets_empty_name(self, email_factory):
        msg = email_factory()
        msg.add_attachment(b"\x00\x01", maintype="application", subtype="octet-stream")
        payload = to_payload(SourceMessage(msg))

        assert [a["name"] for a in payload["attachments"]] == [""]

    def test_conditional_keys_absent_without_parts(self, plain_message):
        payload = to_payload(plain_message)
        assert not set(CONDITIONAL_PAYLOAD_FIELDS) & set(payload)


class TestExtensionFields:
    """Tests for custom header driven fields."""

    def test_tri_states_and_strings(self, plain_email):
        message = SourceMessage(
            plain_email,
            {
                "track_opens": "true",
                "track_clicks": "false",
                "auto_text": True,
                "subaccount": "acme",
                "merge_language": "handlebars",
                "tags": "welcome, onboarding",
                "important": "true",
            },
        )
        payload = to_payload(message)

        assert payload["track_opens"] is True
        assert payload["track_clicks"] is False
        assert payload["auto_text"] is True
        assert payload["auto_html"] is None
        assert payload["subaccount"] == "acme"
        assert payload["merge_language"] == "handlebars"
        assert payload["tags"] == ["welcome", "onboarding"]
        assert payload["important"] is True

    @pytest.mark.parametrize("value", ["TRUE", "1"])
    def test_important_case_sensitive(self, plain_email, value):
        payload = to_payload(SourceMessage(plain_email, {"important": value}))
        assert payload["important"] is False

    def test_structured_values_verbatim(self, plain_email, merge_vars, global_merge_vars):
        metadata = {"user_id": 42, "plan": "pro"}
        message = SourceMessage(
            plain_email,
            {
                "merge_vars": merge_vars,
                "global_merge_vars": global_merge_vars,
                "metadata": metadata,
            },
        )
        payload = to_payload(message)

        assert payload["merge_vars"] == merge_vars
        assert payload["global_merge_vars"] == global_merge_vars
        assert payload["metadata"] == metadata

    def test_global_merge_vars_json_string(self, plain_email):
        raw = '[{"name":"FOO","content":"bar"}]\r\n'
        payload = to_payload(SourceMessage(plain_email, {"global_merge_vars": raw}))
        assert payload["global_merge_vars"] == [{"name": "FOO", "content": "bar"}]

    def test_duplicate_headers(self, email_factory):
        msg = email_factory()
        msg["X-Foo"] = "1"
        msg["X-Foo"] = "2"
        assert to_payload(SourceMessage(msg))["headers"]["X-Foo"] == "2"


class TestFatalErrors:
    """Fatal extension values abort the whole call."""

    def test_malformed_global_merge_vars(self, plain_email):
        message = SourceMessage(plain_email, {"global_merge_vars": "not json {"})
        with pytest.raises(MalformedMergeVarsJson):
            to_payload(message)

    def test_invalid_send_at_type(self, plain_email):
        message = SourceMessage(plain_email, {"send_at": 12345})
        with pytest.raises(InvalidSendAtType):
            to_payload(message)

    def test_invalid_send_at_in_send_request(self, plain_email):
        message = SourceMessage(plain_email, {"send_at": [2024, 3, 1]})
        with pytest.raises(InvalidSendAtType):
            build_send_request(message)


class TestPayloadAssembler:
    """Tests for the dispatch table and staged assembly."""

    def test_dispatch_table_covers_extension_keys(self):
        extension_keys = set(PAYLOAD_FIELDS) - {
            "from_email", "from_name", "headers", "html", "subject", "text", "to",
        }
        assert extension_keys <= set(EXTENSION_READERS)
        assert {"send_at", "template", "template_content", "ip_pool"} <= set(EXTENSION_READERS)

    def test_dispatch_table_built_from_field_tables(self):
        for name in TRI_STATE_FIELDS + STRING_FIELDS + RAW_VALUE_FIELDS:
            assert name in EXTENSION_READERS, name

    def test_raw_fields_read_verbatim(self, plain_email):
        content = [{"name": "header", "content": "<h1>Hi</h1>"}]
        message = SourceMessage(plain_email, {"template_content": content})

        assert PayloadAssembler(message).resolve_extensions()["template_content"] is content

    def test_resolve_extensions(self, plain_email):
        message = SourceMessage(plain_email, {"send_at": date(2024, 3, 1), "ip_pool": "Main Pool"})
        extensions = PayloadAssembler(message).resolve_extensions()

        assert extensions["send_at"] == "2024-03-01 00:00:00"
        assert extensions["ip_pool"] == "Main Pool"
        assert extensions["template"] is None


class TestBuildSendRequest:
    """Tests for the messages/send envelope."""

    def test_plain_send(self, plain_email):
        sent_at = datetime(2024, 3, 1, 13, 5, 9, tzinfo=timezone.utc)
        request = build_send_request(SourceMessage(plain_email, {"send_at": sent_at}))

        assert set(request) == {"message", "async", "ip_pool", "send_at"}
        assert request["send_at"] == "2024-03-01 13:05:09"
        assert request["async"] is False
        assert request["ip_pool"] is None
        assert list(request["message"]) == PAYLOAD_FIELDS

    def test_send_at_string_passes_through(self, plain_email):
        message = SourceMessage(plain_email, {"send_at": "2024-03-01 13:05:09"})
        assert build_send_request(message)["send_at"] == "2024-03-01 13:05:09"

    def test_template_send(self, plain_email):
        content = [{"name": "main", "content": "<p>Hi</p>"}]
        message = SourceMessage(
            plain_email,
            {"template": "welcome-email", "template_content": content},
        )
        request = build_send_request(message, async_=True)

        assert request["template_name"] == "welcome-email"
        assert request["template_content"] == content
        assert request["async"] is True
