"""
Tests for the JSON serialization policy.
"""

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from falu.core.config import SerializerOptions
from falu.core.serialization import JsonValue, ListOf, Serializer, loads_tolerant, to_camel
from falu.resources.evaluations import Evaluation
from falu.resources.messages import (
    Message,
    MessageCreateRequest,
    MessageStatus,
    MessageTemplateReference,
)
from falu.resources.payment_reversals import PaymentReversalReason, PaymentReversalRequest


@pytest.fixture
def serializer():
    return Serializer()


class TestWriting:
    """Tests for serializing request models."""

    def test_to_camel(self):
        assert to_camel("payment_id") == "paymentId"
        assert to_camel("statement_provider") == "statementProvider"
        assert to_camel("id") == "id"

    def test_camel_case_and_nulls_omitted(self, serializer):
        request = MessageCreateRequest(
            to="+254722000000",
            body="Hello",
            template=MessageTemplateReference(alias="welcome", model={"first_name": "Jo"}),
        )

        payload = json.loads(serializer.serialize(request))

        assert payload == {
            "to": "+254722000000",
            "body": "Hello",
            "template": {"alias": "welcome", "model": {"first_name": "Jo"}},
        }

    def test_enum_written_by_name(self, serializer):
        request = PaymentReversalRequest(
            payment_id="pa_123",
            reason=PaymentReversalReason.REQUESTED_BY_CUSTOMER,
        )

        assert serializer.to_payload(request) == {
            "paymentId": "pa_123",
            "reason": "requestedByCustomer",
        }

    def test_datetime_written_as_iso(self, serializer):
        request = MessageCreateRequest(schedule=datetime(2022, 1, 1, 8, 30, tzinfo=timezone.utc))

        assert serializer.to_payload(request) == {"schedule": "2022-01-01T08:30:00Z"}

    def test_unsupported_value(self, serializer):
        with pytest.raises(PydanticSerializationError):
            serializer.to_payload(object())


class TestReading:
    """Tests for deserializing response bodies."""

    def test_tolerates_comments_and_trailing_commas(self, serializer):
        body = b"""{
            // leading comment
            "id": "msg_123",
            "status": "delivered", /* inline */
            "metadata": {"ref": "abc",},
        }"""

        message = serializer.deserialize(body, Message)

        assert message.id == "msg_123"
        assert message.status is MessageStatus.DELIVERED
        assert message.metadata == {"ref": "abc"}

    def test_comment_markers_inside_strings_are_kept(self):
        payload = loads_tolerant(b'{"body": "see http://x.io, ] /* not a comment */"}')

        assert payload == {"body": "see http://x.io, ] /* not a comment */"}

    def test_unterminated_comment(self):
        with pytest.raises(ValueError):
            loads_tolerant(b'{"id": 1 /* open')

    def test_field_names_match_case_insensitively(self, serializer):
        message = serializer.deserialize(b'{"ID": "msg_1", "WORKSPACEID": "wksp_1"}', Message)

        assert message.id == "msg_1"
        assert message.workspace_id == "wksp_1"

    def test_case_sensitive_matching_when_disabled(self):
        strict = Serializer(SerializerOptions(case_insensitive=False))

        message = strict.deserialize(b'{"ID": "msg_1"}', Message)

        assert message.id is None

    def test_enum_read_by_name_spellings(self, serializer):
        first = serializer.validate(PaymentReversalReason, "requestedByCustomer")
        second = serializer.validate(PaymentReversalReason, "requested_by_customer")

        assert first is second is PaymentReversalReason.REQUESTED_BY_CUSTOMER

    def test_unknown_enum(self, serializer):
        with pytest.raises(ValidationError):
            serializer.validate(MessageStatus, "teleported")

    def test_nested_models_and_dates(self, serializer):
        body = json.dumps(
            {
                "id": "ev_1",
                "scoring": {
                    "statementProvider": "mpesa",
                    "risk": 1,
                    "limit": 1500000,
                    "period": {"start": "2022-01-01T00:00:00Z", "end": "2022-06-30T00:00:00Z"},
                },
            }
        )

        evaluation = serializer.deserialize(body, Evaluation)

        assert evaluation.scoring.statement_provider == "mpesa"
        assert evaluation.scoring.risk == 1.0
        assert evaluation.scoring.limit == 1500000
        assert evaluation.scoring.period.start == datetime(2022, 1, 1, tzinfo=timezone.utc)

    def test_wrong_shape(self, serializer):
        with pytest.raises(ValidationError):
            serializer.deserialize(b'{"id": 42}', Message)

    def test_list_of(self, serializer):
        messages = serializer.deserialize(b'[{"id": "msg_1"}, {"id": "msg_2"}]', ListOf(Message))

        assert [m.id for m in messages] == ["msg_1", "msg_2"]

    def test_list_of_requires_array(self, serializer):
        with pytest.raises(ValidationError):
            serializer.deserialize(b'{"id": "msg_1"}', ListOf(Message))

    def test_json_value_passthrough(self, serializer):
        assert serializer.deserialize(b'{"anything": [1, 2]}', JsonValue) == {"anything": [1, 2]}

    def test_sequence_tags(self):
        assert ListOf(Message).is_sequence is True
        assert Message.is_sequence is False
        assert JsonValue.is_sequence is False
