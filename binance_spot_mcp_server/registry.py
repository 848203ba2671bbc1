"""
Static registry of the tools this server exposes.

Each entry pairs a ``ToolDescriptor`` (name, description, JSON input schema)
with the function that implements it. Argument names in the schemas match the
keyword parameters of the handler functions.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from binance_spot_mcp_server import tools
from binance_spot_mcp_server.tools.market import KLINE_INTERVALS
from binance_spot_mcp_server.tools.wallet import DEPOSIT_STATUS, WITHDRAW_STATUS
from binance_spot_mcp_server.tools.trading import (
    VALID_SIDES,
    VALID_ORDER_TYPES,
    VALID_TIF,
    VALID_RESPONSE_TYPES,
)


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass(frozen=True)
class RegisteredTool:
    descriptor: ToolDescriptor
    handler: Callable[..., Any]

    @property
    def name(self) -> str:
        return self.descriptor.name


def _string(description: str, enum: Optional[List[str]] = None) -> Dict[str, Any]:
    prop: Dict[str, Any] = {"type": "string", "description": description}
    if enum:
        prop["enum"] = list(enum)
    return prop


def _integer(description: str) -> Dict[str, Any]:
    return {"type": "integer", "description": description}


def _decimal(description: str) -> Dict[str, Any]:
    # Strings keep exact precision; numbers are accepted for convenience
    return {"type": ["string", "number"], "description": description}


def _status(codes: Dict[int, str]) -> Dict[str, Any]:
    legend = ", ".join(f"{code}: {label}" for code, label in codes.items())
    return _integer(f"Status ({legend})")


def _schema(properties: Dict[str, Any], required: Optional[List[str]] = None) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(required or []),
        "additionalProperties": False,
    }


SYMBOL = _string("Trading pair symbol (e.g., BTCUSDT, ETHUSDT)")
COIN = _string("Coin symbol (e.g., BTC, ETH)")
NETWORK = _string("Network (e.g., BSC, ETH)")
START_TIME = _integer("Start time in milliseconds")
END_TIME = _integer("End time in milliseconds")


def _tool(name: str, description: str, schema: Dict[str, Any], handler: Callable[..., Any]) -> RegisteredTool:
    return RegisteredTool(ToolDescriptor(name, description, schema), handler)


TOOLS: List[RegisteredTool] = [
    # Market data
    _tool(
        "get_price",
        "Get the current price of a cryptocurrency",
        _schema({"symbol": SYMBOL}, ["symbol"]),
        tools.get_price,
    ),
    _tool(
        "get_24hr_ticker",
        "Get 24hr ticker price change statistics for one symbol or all symbols",
        _schema({"symbol": SYMBOL}),
        tools.get_24hr_ticker,
    ),
    _tool(
        "get_klines",
        "Get candlestick data (klines) as named records",
        _schema(
            {
                "symbol": SYMBOL,
                "interval": _string("Kline interval", KLINE_INTERVALS),
                "limit": _integer("Number of entries to return (default 500, max 1000)"),
                "start_time": START_TIME,
                "end_time": END_TIME,
            },
            ["symbol", "interval"],
        ),
        tools.get_klines,
    ),
    _tool(
        "get_order_book",
        "Get order book bids and asks for a symbol",
        _schema(
            {
                "symbol": SYMBOL,
                "limit": _integer("Depth of the order book (default 100, max 5000)"),
            },
            ["symbol"],
        ),
        tools.get_order_book,
    ),
    _tool(
        "get_recent_trades",
        "Get recent trades for a symbol",
        _schema(
            {
                "symbol": SYMBOL,
                "limit": _integer("Number of trades to return (default 500, max 1000)"),
            },
            ["symbol"],
        ),
        tools.get_recent_trades,
    ),
    # Account
    _tool(
        "get_account",
        "Get account information including balances",
        _schema({}),
        tools.get_account,
    ),
    _tool(
        "get_my_trades",
        "Get the account's trades for a specific symbol",
        _schema(
            {
                "symbol": SYMBOL,
                "order_id": _integer("Order ID to filter trades"),
                "start_time": START_TIME,
                "end_time": END_TIME,
                "from_id": _integer("Trade ID to fetch from"),
                "limit": _integer("Number of trades to return (default 500, max 1000)"),
            },
            ["symbol"],
        ),
        tools.get_my_trades,
    ),
    _tool(
        "get_open_orders",
        "Get current open orders for a symbol or all symbols",
        _schema({"symbol": SYMBOL}),
        tools.get_open_orders,
    ),
    _tool(
        "get_all_orders",
        "Get all orders for a symbol (active, canceled, or filled)",
        _schema(
            {
                "symbol": SYMBOL,
                "order_id": _integer("Order ID to start from"),
                "start_time": START_TIME,
                "end_time": END_TIME,
                "limit": _integer("Number of entries to return (default 500, max 1000)"),
            },
            ["symbol"],
        ),
        tools.get_all_orders,
    ),
    # Trading
    _tool(
        "place_order",
        "Place a buy or sell order",
        _schema(
            {
                "symbol": SYMBOL,
                "side": _string("Order side", VALID_SIDES),
                "order_type": _string("Order type", VALID_ORDER_TYPES),
                "quantity": _decimal("Order quantity"),
                "price": _decimal("Order price (required for LIMIT orders)"),
                "time_in_force": _string("Time in force (required for LIMIT orders)", VALID_TIF),
                "new_client_order_id": _string("A unique ID for the order (generated by the exchange if not sent)"),
                "stop_price": _decimal(
                    "Stop price (required for STOP_LOSS, STOP_LOSS_LIMIT, TAKE_PROFIT and TAKE_PROFIT_LIMIT orders)"
                ),
                "iceberg_qty": _decimal("Visible quantity for an iceberg order"),
                "new_order_resp_type": _string("Response detail level", VALID_RESPONSE_TYPES),
            },
            ["symbol", "side", "order_type", "quantity"],
        ),
        tools.place_order,
    ),
    _tool(
        "cancel_order",
        "Cancel an active order by order ID or client order ID",
        _schema(
            {
                "symbol": SYMBOL,
                "order_id": _integer("Order ID"),
                "client_order_id": _string("Client order ID"),
            },
            ["symbol"],
        ),
        tools.cancel_order,
    ),
    _tool(
        "cancel_all_orders",
        "Cancel all open orders on a symbol",
        _schema({"symbol": SYMBOL}, ["symbol"]),
        tools.cancel_all_orders,
    ),
    _tool(
        "get_order",
        "Check an order's status",
        _schema(
            {
                "symbol": SYMBOL,
                "order_id": _integer("Order ID"),
                "client_order_id": _string("Client order ID"),
            },
            ["symbol"],
        ),
        tools.get_order,
    ),
    # Wallet
    _tool(
        "get_deposit_address",
        "Get deposit address for a coin",
        _schema({"coin": COIN, "network": NETWORK}, ["coin"]),
        tools.get_deposit_address,
    ),
    _tool(
        "get_deposit_history",
        "Get deposit history",
        _schema(
            {
                "coin": COIN,
                "status": _status(DEPOSIT_STATUS),
                "start_time": START_TIME,
                "end_time": END_TIME,
                "offset": _integer("Offset"),
                "limit": _integer("Limit"),
            }
        ),
        tools.get_deposit_history,
    ),
    _tool(
        "get_withdraw_history",
        "Get withdrawal history",
        _schema(
            {
                "coin": COIN,
                "status": _status(WITHDRAW_STATUS),
                "start_time": START_TIME,
                "end_time": END_TIME,
                "offset": _integer("Offset"),
                "limit": _integer("Limit"),
            }
        ),
        tools.get_withdraw_history,
    ),
    _tool(
        "withdraw",
        "Submit a withdrawal request",
        _schema(
            {
                "coin": COIN,
                "address": _string("Withdrawal address"),
                "amount": _decimal("Withdrawal amount"),
                "network": NETWORK,
                "name": _string("Description of the address"),
                "address_tag": _string("Secondary address identifier for coins like XRP, XMR, etc."),
            },
            ["coin", "address", "amount"],
        ),
        tools.withdraw,
    ),
]


TOOLS_BY_NAME: Dict[str, RegisteredTool] = {tool.name: tool for tool in TOOLS}

if len(TOOLS_BY_NAME) != len(TOOLS):
    raise RuntimeError("Duplicate tool names in registry")


def list_descriptors() -> List[ToolDescriptor]:
    """Return all tool descriptors in registry order."""
    return [tool.descriptor for tool in TOOLS]


def get_tool(name: str) -> Optional[RegisteredTool]:
    """Look up a registered tool by name."""
    return TOOLS_BY_NAME.get(name)
