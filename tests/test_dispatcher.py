"""
Unit tests for the tool registry and dispatcher.

These tests cover:
- Registry completeness and uniqueness
- Unknown tool handling
- Schema validation at the dispatch boundary
- JSON text payloads and error results
"""

import json

import pytest
from unittest.mock import Mock, patch

from binance_spot_mcp_server.dispatcher import ToolDispatcher, ToolResult
from binance_spot_mcp_server.registry import TOOLS, get_tool, list_descriptors

from conftest import make_response


EXPECTED_TOOLS = {
    "get_price",
    "get_24hr_ticker",
    "get_klines",
    "get_order_book",
    "get_recent_trades",
    "get_account",
    "get_my_trades",
    "get_open_orders",
    "get_all_orders",
    "place_order",
    "cancel_order",
    "cancel_all_orders",
    "get_order",
    "get_deposit_address",
    "get_deposit_history",
    "get_withdraw_history",
    "withdraw",
}

PRIVATE_CALLS = [
    ("get_account", {}),
    ("get_my_trades", {"symbol": "BTCUSDT"}),
    ("get_open_orders", {}),
    ("get_all_orders", {"symbol": "BTCUSDT"}),
    ("place_order", {"symbol": "BTCUSDT", "side": "BUY", "order_type": "MARKET", "quantity": "1"}),
    ("cancel_order", {"symbol": "BTCUSDT", "order_id": 1}),
    ("cancel_all_orders", {"symbol": "BTCUSDT"}),
    ("get_order", {"symbol": "BTCUSDT", "order_id": 1}),
    ("get_deposit_address", {"coin": "BTC"}),
    ("get_deposit_history", {}),
    ("get_withdraw_history", {}),
    ("withdraw", {"coin": "BTC", "address": "1abc", "amount": "0.1"}),
]


@pytest.fixture
def dispatcher(client):
    return ToolDispatcher(client)


class TestRegistry:
    """Test the static tool table."""

    def test_every_tool_listed_once(self, dispatcher):
        """Test each supported tool has exactly one descriptor."""
        names = [descriptor.name for descriptor in dispatcher.list_tools()]
        assert sorted(names) == sorted(EXPECTED_TOOLS)
        assert len(names) == len(set(names))

    def test_descriptions_non_empty(self):
        """Test every descriptor has a description."""
        for descriptor in list_descriptors():
            assert descriptor.description.strip()

    def test_schemas_are_objects(self):
        """Test every schema is a closed JSON object schema."""
        for descriptor in list_descriptors():
            schema = descriptor.input_schema
            assert schema["type"] == "object"
            assert schema["additionalProperties"] is False
            assert set(schema["required"]) <= set(schema["properties"])

    def test_descriptor_to_dict(self):
        """Test MCP-style serialization of a descriptor."""
        data = get_tool("get_klines").descriptor.to_dict()
        assert data["name"] == "get_klines"
        assert data["inputSchema"]["required"] == ["symbol", "interval"]

    def test_descriptors_immutable(self):
        """Test descriptors cannot be modified."""
        descriptor = TOOLS[0].descriptor
        with pytest.raises(Exception):
            descriptor.name = "other"

    def test_place_order_enums(self):
        """Test allowed-value sets are declared."""
        props = get_tool("place_order").descriptor.input_schema["properties"]
        assert props["side"]["enum"] == ["BUY", "SELL"]
        assert "LIMIT_MAKER" in props["order_type"]["enum"]


class TestUnknownTool:
    """Test unknown tool handling."""

    def test_error_result_contains_name(self, dispatcher, session):
        """Test the unknown name appears in the error and no request is made."""
        result = dispatcher.call_tool("get_moon_price", {"symbol": "BTCUSDT"})

        assert result.is_error is True
        assert result.error_type == "unknown_tool"
        assert "get_moon_price" in result.text
        session.request.assert_not_called()


class TestArgumentValidation:
    """Test schema validation at the dispatch boundary."""

    def test_missing_required_field(self, dispatcher, session):
        """Test a missing required argument is rejected without a request."""
        result = dispatcher.call_tool("get_klines", {"symbol": "BTCUSDT"})

        assert result.is_error is True
        assert result.error_type == "invalid_arguments"
        assert "interval" in result.text
        session.request.assert_not_called()

    def test_none_required_field_rejected(self, dispatcher, session):
        """Test a required argument passed as None counts as missing."""
        result = dispatcher.call_tool("get_price", {"symbol": None})

        assert result.error_type == "invalid_arguments"
        session.request.assert_not_called()

    def test_enum_violation(self, dispatcher, session):
        """Test values outside the allowed set are rejected."""
        result = dispatcher.call_tool(
            "place_order",
            {"symbol": "BTCUSDT", "side": "HOLD", "order_type": "MARKET", "quantity": "1"},
        )

        assert result.error_type == "invalid_arguments"
        assert "side" in result.text
        session.request.assert_not_called()

    def test_wrong_type(self, dispatcher):
        """Test a string where an integer is expected is rejected."""
        result = dispatcher.call_tool("get_order_book", {"symbol": "BTCUSDT", "limit": "ten"})

        assert result.error_type == "invalid_arguments"
        assert "limit" in result.text

    def test_unexpected_argument(self, dispatcher):
        """Test arguments outside the schema are rejected."""
        result = dispatcher.call_tool("get_price", {"symbol": "BTCUSDT", "foo": 1})

        assert result.error_type == "invalid_arguments"
        assert "foo" in result.text

    def test_camel_case_argument_names_rejected(self, dispatcher, session):
        """Test Binance wire names are not accepted in place of the snake_case arguments."""
        result = dispatcher.call_tool(
            "get_klines",
            {"symbol": "BTCUSDT", "interval": "1h", "startTime": 1700000000000},
        )

        assert result.error_type == "invalid_arguments"
        assert "startTime" in result.text
        session.request.assert_not_called()

    def test_problems_listed_in_details(self, dispatcher):
        """Test every problem is reported."""
        result = dispatcher.call_tool("withdraw", {})

        assert result.error_type == "invalid_arguments"
        assert len(result.details["problems"]) == 3


class TestDispatch:
    """Test successful dispatch and error conversion."""

    def test_success_is_json_text(self, dispatcher, session):
        """Test the handler result is returned as JSON text."""
        session.request.return_value = make_response({"symbol": "BTCUSDT", "price": "50000.00"})

        result = dispatcher.call_tool("get_price", {"symbol": "BTCUSDT"})

        assert result.is_error is False
        assert result.error_type is None
        assert json.loads(result.text) == {"symbol": "BTCUSDT", "price": "50000.00"}

    def test_optional_none_not_sent(self, dispatcher, session):
        """Test optional arguments passed as None are absent from the request."""
        session.request.return_value = make_response([])

        dispatcher.call_tool(
            "get_klines",
            {"symbol": "BTCUSDT", "interval": "1d", "limit": None, "start_time": None, "end_time": None},
        )

        query = session.request.call_args.kwargs["params"]
        assert query == [("symbol", "BTCUSDT"), ("interval", "1d")]

    def test_klines_reshaped_in_payload(self, dispatcher, session):
        """Test reshaped klines reach the caller."""
        session.request.return_value = make_response([
            [1619712000000, "50050.00", "50100.00", "50000.00", "50080.00", "100.5",
             1619715600000, "5030000.00", 1000, "60.5", "3030000.00", "0"],
        ])

        result = dispatcher.call_tool("get_klines", {"symbol": "BTCUSDT", "interval": "1h"})

        payload = json.loads(result.text)
        assert payload[0]["openTime"] == 1619712000000
        assert payload[0]["takerBuyQuoteAssetVolume"] == "3030000.00"

    @pytest.mark.parametrize("name,arguments", PRIVATE_CALLS)
    def test_private_call_http_error_is_error_result(self, dispatcher, session, name, arguments):
        """Test a non-2xx response on any private call yields a request_failed result."""
        session.request.return_value = make_response(
            {"code": -2015, "msg": "Invalid API-key, IP, or permissions for action."},
            status_code=401,
            reason="Unauthorized",
        )

        result = dispatcher.call_tool(name, arguments)

        assert result.is_error is True
        assert result.error_type == "request_failed"
        assert "Invalid API-key" in result.text
        assert result.details["status_code"] == 401
        assert session.request.call_count == 1

    def test_unexpected_exception_is_error_result(self, client):
        """Test a handler bug is reported, not raised."""
        dispatcher = ToolDispatcher(client)
        broken = Mock(side_effect=KeyError("bids"))

        with patch("binance_spot_mcp_server.dispatcher.get_tool") as mock_get_tool:
            mock_get_tool.return_value = Mock(descriptor=get_tool("get_order_book").descriptor, handler=broken)
            result = dispatcher.call_tool("get_order_book", {"symbol": "BTCUSDT"})

        assert result.is_error is True
        assert result.error_type == "tool_error"
        assert "Tool execution failed" in result.text

    def test_arguments_default_to_empty(self, dispatcher, session):
        """Test None arguments are treated as no arguments."""
        session.request.return_value = make_response({"balances": []})

        result = dispatcher.call_tool("get_account", None)

        assert result.is_error is False


class TestToolResult:
    """Test the ToolResult constructors."""

    def test_failure_text_prefixed(self):
        """Test error text follows the 'Error: ...' convention."""
        result = ToolResult.failure("request_failed", "boom")
        assert result.text == "Error: boom"
        assert result.is_error is True

    def test_success_pretty_printed(self):
        """Test success payloads are indented JSON."""
        assert ToolResult.success({"a": 1}).text == '{\n  "a": 1\n}'
