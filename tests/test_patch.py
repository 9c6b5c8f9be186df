"""
Tests for JSON Patch documents and partial updates.
"""

import asyncio
import json
from dataclasses import dataclass

import pytest

from falu.core.patch import PatchDocument, PatchOperation, encode_patch
from falu.resources.evaluations import EvaluationPatchModel
from falu.resources.messages import MessagePatchModel
from falu.resources.payment_reversals import PaymentReversalPatchModel


def _ops(document, model=None):
    return json.loads(encode_patch(document, model))


class TestBuilding:
    """Paths are checked against the patch model while building."""

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError, match="not a patchable field"):
            PatchDocument(MessagePatchModel).replace("to", "+254700000000")

    def test_nested_path_on_scalar_rejected(self):
        with pytest.raises(ValueError, match="nested"):
            PatchDocument(PaymentReversalPatchModel).replace("description/first", "x")

    def test_nested_path_on_mapping_allowed(self):
        patch = PatchDocument(MessagePatchModel).add("metadata/ref", "123")

        assert _ops(patch) == [{"op": "add", "path": "/metadata/ref", "value": "123"}]

    def test_python_and_wire_spellings(self):
        patch = (
            PatchDocument(EvaluationPatchModel)
            .replace("/description", "first")
            .replace("Description", "second")
        )

        assert [op.path for op in patch] == ["/description", "/description"]

    def test_sequence_paths_are_escaped(self):
        patch = PatchDocument(MessagePatchModel).add(["metadata", "a/b"], "1").add(
            ("metadata", "x~y"), "2"
        )

        assert [op.path for op in patch] == ["/metadata/a~1b", "/metadata/x~0y"]

    def test_empty_path_rejected(self):
        with pytest.raises(ValueError):
            PatchDocument(MessagePatchModel).remove("")

    def test_model_must_be_pydantic_model(self):
        @dataclass
        class Plain:
            description: str = ""

        with pytest.raises(TypeError, match="pydantic"):
            PatchDocument(Plain)
        with pytest.raises(TypeError):
            PatchDocument(dict)

    def test_builder_returns_new_documents(self):
        empty = PatchDocument(MessagePatchModel)
        one = empty.add("metadata/a", "1")
        two = one.remove("metadata/b")

        assert len(empty) == 0
        assert len(one) == 1
        assert len(two) == 2
        assert one.operations == (PatchOperation("add", "/metadata/a", "1"),)


class TestEncoding:
    """Serialization of patch documents."""

    def test_order_preserved_last_write_wins_on_server(self):
        patch = (
            PatchDocument(PaymentReversalPatchModel)
            .replace("description", "first")
            .replace("description", "second")
        )

        ops = _ops(patch, PaymentReversalPatchModel)

        assert [op["value"] for op in ops] == ["first", "second"]

    def test_remove_omits_value(self):
        ops = _ops(PatchDocument(MessagePatchModel).remove("metadata/ref"))

        assert ops == [{"op": "remove", "path": "/metadata/ref"}]

    def test_replace_with_none_keeps_explicit_null(self):
        ops = _ops(PatchDocument(PaymentReversalPatchModel).replace("description", None))

        assert ops == [{"op": "replace", "path": "/description", "value": None}]

    def test_whole_mapping_value(self):
        ops = _ops(PatchDocument(MessagePatchModel).replace("metadata", {"a": "1"}))

        assert ops == [{"op": "replace", "path": "/metadata", "value": {"a": "1"}}]

    def test_model_mismatch(self):
        patch = PatchDocument(EvaluationPatchModel).replace("description", "x")

        with pytest.raises(ValueError, match="cannot be applied"):
            encode_patch(patch, PaymentReversalPatchModel)

    def test_hand_built_operations_are_revalidated(self):
        patch = PatchDocument(MessagePatchModel, [PatchOperation("replace", "/body", "x")])

        with pytest.raises(ValueError):
            encode_patch(patch)

    def test_unsupported_operation(self):
        patch = PatchDocument(MessagePatchModel, [PatchOperation("move", "/metadata")])

        with pytest.raises(ValueError, match="Unsupported"):
            encode_patch(patch)


class TestUpdateOperation:
    """Services send patches with the JSON Patch content type."""

    def test_update_sends_patch(self, make_client, json_response):
        client, transport = make_client(json_response(200, {"id": "pr_1", "description": "x"}))
        patch = PatchDocument(PaymentReversalPatchModel).replace("description", "x")

        response = asyncio.run(client.payment_reversals.update("pr_1", patch))

        request = transport.requests[0]
        assert request.method == "PATCH"
        assert request.url == "https://api.falu.io/v1/payment_reversals/pr_1"
        assert request.headers["Content-Type"] == "application/json-patch+json"
        assert request.idempotency_key
        assert json.loads(request.content) == [
            {"op": "replace", "path": "/description", "value": "x"}
        ]
        assert response.resource.description == "x"

    def test_wrong_model_fails_before_sending(self, make_client):
        client, transport = make_client()
        patch = PatchDocument(EvaluationPatchModel).replace("description", "x")

        with pytest.raises(ValueError):
            asyncio.run(client.payment_reversals.update("pr_1", patch))

        assert transport.requests == []

    def test_blank_id_fails_before_sending(self, make_client):
        client, transport = make_client()
        patch = PatchDocument(MessagePatchModel).add("metadata/ref", "1")

        with pytest.raises(ValueError):
            asyncio.run(client.messages.update("  ", patch))

        assert transport.requests == []
