"""
Account inspection tools.

Corresponds to Binance API account endpoints (USER_DATA, signed):
    GET /api/v3/account
    GET /api/v3/myTrades
    GET /api/v3/openOrders
    GET /api/v3/allOrders
"""

from typing import Any, Optional

from binance_spot_mcp_server.client import BinanceClient
from binance_spot_mcp_server.utils import build_params


def get_account(client: BinanceClient) -> Any:
    """
    Get account information including balances.

    Returns:
        Raw account payload (commission rates, permissions, ``balances`` with
        ``asset``/``free``/``locked``)
    """
    return client.get("/api/v3/account", signed=True)


def get_my_trades(
    client: BinanceClient,
    symbol: str,
    order_id: Optional[int] = None,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
    from_id: Optional[int] = None,
    limit: Optional[int] = None,
) -> Any:
    """
    Get the account's trades for a symbol.

    Args:
        client: Binance client
        symbol: Trading pair symbol
        order_id: Only trades belonging to this order
        start_time: Start time in milliseconds
        end_time: End time in milliseconds
        from_id: Trade ID to fetch from
        limit: Number of trades (default 500, max 1000)
    """
    params = build_params(
        symbol=symbol,
        orderId=order_id,
        startTime=start_time,
        endTime=end_time,
        fromId=from_id,
        limit=limit,
    )
    return client.get("/api/v3/myTrades", params, signed=True)


def get_open_orders(client: BinanceClient, symbol: Optional[str] = None) -> Any:
    """Get open orders for a symbol, or for all symbols when omitted."""
    return client.get("/api/v3/openOrders", build_params(symbol=symbol), signed=True)


def get_all_orders(
    client: BinanceClient,
    symbol: str,
    order_id: Optional[int] = None,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
    limit: Optional[int] = None,
) -> Any:
    """Get all orders for a symbol: active, canceled, or filled."""
    params = build_params(
        symbol=symbol,
        orderId=order_id,
        startTime=start_time,
        endTime=end_time,
        limit=limit,
    )
    return client.get("/api/v3/allOrders", params, signed=True)
