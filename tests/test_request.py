"""
Tests for request building and query strings.
"""

import json
import uuid
from datetime import datetime

import pytest

from falu.core.config import ApplicationInformation, ClientOptions
from falu.core.query import ListOptions, QueryValues, RangeFilter, make_query_string
from falu.core.request import RequestOptions, build_request, ensure_identifier
from falu.resources.messages import MessagesListOptions, MessageStatus


class TestBuildRequest:
    """Tests for build_request."""

    def test_get_carries_auth_and_version(self, options):
        request = build_request(options, "get", "/v1/messages/msg_123")

        assert request.method == "GET"
        assert request.url == "https://api.falu.io/v1/messages/msg_123"
        assert request.headers["Authorization"] == "Bearer sk_test_123"
        assert request.headers["X-Falu-Version"] == "2022-01-01"
        assert request.headers["User-Agent"].startswith("falu-python/")
        assert "X-Idempotency-Key" not in request.headers
        assert "Content-Type" not in request.headers
        assert request.content is None
        assert request.timeout == options.timeout

    def test_post_serializes_body_and_generates_idempotency_key(self, options):
        request = build_request(options, "POST", "/v1/messages", body={"to": "+254722000000"})

        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"to": "+254722000000"}
        assert uuid.UUID(request.idempotency_key)

    def test_each_logical_call_gets_its_own_key(self, options):
        first = build_request(options, "POST", "/v1/messages", body={})
        second = build_request(options, "POST", "/v1/messages", body={})

        assert first.idempotency_key != second.idempotency_key

    def test_explicit_idempotency_key(self, options):
        request = build_request(
            options,
            "POST",
            "/v1/messages",
            body={},
            request_options=RequestOptions(idempotency_key="key_1"),
        )

        assert request.headers["X-Idempotency-Key"] == "key_1"

    def test_overrides_layer_on_top_without_touching_defaults(self, options):
        overridden = build_request(
            options,
            "GET",
            "/v1/messages",
            request_options=RequestOptions(
                workspace="wksp_1",
                live=False,
                timeout=5,
                headers={"X-Custom": "1", "Accept": "text/plain"},
            ),
        )
        plain = build_request(options, "GET", "/v1/messages")

        assert overridden.headers["X-Workspace-Id"] == "wksp_1"
        assert overridden.headers["X-Live-Mode"] == "false"
        assert overridden.headers["X-Custom"] == "1"
        assert overridden.headers["Accept"] == "text/plain"
        assert overridden.timeout == 5
        assert "X-Custom" not in plain.headers
        assert plain.headers["Accept"] == "application/json"
        assert plain.timeout == options.timeout == 100.0

    def test_headers_are_read_only(self, options):
        request = build_request(options, "GET", "/v1/messages")

        with pytest.raises(TypeError):
            request.headers["Authorization"] = "Bearer other"

    def test_user_agent_includes_application(self):
        options = ClientOptions(
            api_key="sk_test_123",
            application=ApplicationInformation(name="shop", version="1.2", url="https://shop.example"),
        )

        request = build_request(options, "GET", "/v1/messages")

        assert request.headers["User-Agent"].endswith("shop/1.2 (https://shop.example)")

    def test_relative_path_and_base_url(self):
        options = ClientOptions(api_key="sk_test_123", base_url="http://localhost:5000/")

        request = build_request(options, "GET", "v1/money_balances")

        assert request.url == "http://localhost:5000/v1/money_balances"

    def test_invalid_request_options(self):
        with pytest.raises(ValueError):
            RequestOptions(timeout=0)
        with pytest.raises(ValueError):
            RequestOptions(idempotency_key="  ")


class TestEnsureIdentifier:
    """Tests for identifier validation."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_rejects_missing(self, value):
        with pytest.raises(ValueError):
            ensure_identifier(value, "id")

    def test_rejects_non_string(self):
        with pytest.raises(TypeError):
            ensure_identifier(123, "id")

    def test_accepts_identifier(self):
        assert ensure_identifier("msg_123") == "msg_123"


class TestQueryString:
    """Tests for list option flattening."""

    def test_empty(self):
        assert make_query_string({}) == ""
        assert make_query_string(ListOptions().to_query()) == ""

    def test_sorted_and_repeated_keys(self):
        options = MessagesListOptions(
            count=5,
            continuation_token="abc",
            status=[MessageStatus.DELIVERED, MessageStatus.FAILED],
            created=RangeFilter(gte=datetime(2022, 1, 1)),
        )
        values = QueryValues()
        options.populate_query_values(values)

        query = make_query_string(values)

        assert query == (
            "?count=5&created.gte=2022-01-01T00%3A00%3A00&ct=abc"
            "&status=delivered&status=failed"
        )

    def test_deterministic_for_same_options(self):
        options = ListOptions(sorting="desc", count=10, continuation_token="tok")

        assert make_query_string(options.to_query()) == make_query_string(options.to_query())
        assert make_query_string(options.to_query()) == "?count=10&ct=tok&sort=desc"

    def test_booleans(self):
        assert make_query_string(QueryValues().add("live", True)) == "?live=true"

    def test_invalid_list_options(self):
        with pytest.raises(ValueError):
            ListOptions(count=0)
        with pytest.raises(ValueError):
            ListOptions(sorting="sideways")
