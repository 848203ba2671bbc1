"""
Binance Spot MCP Tools.

Each function takes a ``BinanceClient`` followed by the tool's arguments and
returns the decoded (and, for klines and the order book, reshaped) exchange
response.
"""

from binance_spot_mcp_server.tools.market import (
    get_price,
    get_24hr_ticker,
    get_klines,
    get_order_book,
    get_recent_trades,
)
from binance_spot_mcp_server.tools.account import (
    get_account,
    get_my_trades,
    get_open_orders,
    get_all_orders,
)
from binance_spot_mcp_server.tools.trading import (
    place_order,
    cancel_order,
    cancel_all_orders,
    get_order,
)
from binance_spot_mcp_server.tools.wallet import (
    get_deposit_address,
    get_deposit_history,
    get_withdraw_history,
    withdraw,
)

__all__ = [
    # Market data
    "get_price",
    "get_24hr_ticker",
    "get_klines",
    "get_order_book",
    "get_recent_trades",
    # Account
    "get_account",
    "get_my_trades",
    "get_open_orders",
    "get_all_orders",
    # Trading
    "place_order",
    "cancel_order",
    "cancel_all_orders",
    "get_order",
    # Wallet
    "get_deposit_address",
    "get_deposit_history",
    "get_withdraw_history",
    "withdraw",
]
