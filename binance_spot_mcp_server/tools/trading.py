"""
Spot order management tools.

Corresponds to Binance API trade endpoints (TRADE / USER_DATA, signed):
    POST   /api/v3/order
    DELETE /api/v3/order
    DELETE /api/v3/openOrders
    GET    /api/v3/order
"""

import logging
from typing import Any, Optional, Union

from binance_spot_mcp_server.client import BinanceClient
from binance_spot_mcp_server.utils import build_params

logger = logging.getLogger(__name__)


VALID_SIDES = ["BUY", "SELL"]

VALID_ORDER_TYPES = [
    "LIMIT",
    "MARKET",
    "STOP_LOSS",
    "STOP_LOSS_LIMIT",
    "TAKE_PROFIT",
    "TAKE_PROFIT_LIMIT",
    "LIMIT_MAKER",
]

VALID_TIF = ["GTC", "IOC", "FOK"]

VALID_RESPONSE_TYPES = ["ACK", "RESULT", "FULL"]

Decimalish = Union[str, float, int]


def place_order(
    client: BinanceClient,
    symbol: str,
    side: str,
    order_type: str,
    quantity: Decimalish,
    price: Optional[Decimalish] = None,
    time_in_force: Optional[str] = None,
    new_client_order_id: Optional[str] = None,
    stop_price: Optional[Decimalish] = None,
    iceberg_qty: Optional[Decimalish] = None,
    new_order_resp_type: Optional[str] = None,
) -> Any:
    """
    Place a new spot order.

    Order-type specific requirements (price and timeInForce for LIMIT,
    stopPrice for the stop/take-profit family) are enforced by the exchange.

    Args:
        client: Binance client
        symbol: Trading pair symbol
        side: BUY or SELL
        order_type: One of VALID_ORDER_TYPES
        quantity: Order quantity
        price: Limit price
        time_in_force: GTC, IOC or FOK
        new_client_order_id: Caller-chosen order ID
        stop_price: Trigger price for stop and take-profit orders
        iceberg_qty: Visible quantity for iceberg orders
        new_order_resp_type: ACK, RESULT or FULL

    Returns:
        Raw order response
    """
    logger.info(f"Placing order: {symbol} {side} {order_type} qty={quantity} price={price}")

    params = build_params(
        symbol=symbol,
        side=side,
        type=order_type,
        quantity=quantity,
        price=price,
        timeInForce=time_in_force,
        newClientOrderId=new_client_order_id,
        stopPrice=stop_price,
        icebergQty=iceberg_qty,
        newOrderRespType=new_order_resp_type,
    )
    return client.post("/api/v3/order", params)


def cancel_order(
    client: BinanceClient,
    symbol: str,
    order_id: Optional[int] = None,
    client_order_id: Optional[str] = None,
) -> Any:
    """
    Cancel an active order by exchange ID or client order ID.

    The client order ID is sent as ``origClientOrderId``.
    """
    logger.info(f"Cancelling order: {symbol} orderId={order_id} clientOrderId={client_order_id}")

    params = build_params(symbol=symbol, orderId=order_id, origClientOrderId=client_order_id)
    return client.delete("/api/v3/order", params)


def cancel_all_orders(client: BinanceClient, symbol: str) -> Any:
    """Cancel every open order on a symbol."""
    logger.info(f"Cancelling all open orders: {symbol}")
    return client.delete("/api/v3/openOrders", build_params(symbol=symbol))


def get_order(
    client: BinanceClient,
    symbol: str,
    order_id: Optional[int] = None,
    client_order_id: Optional[str] = None,
) -> Any:
    """Check an order's status."""
    params = build_params(symbol=symbol, orderId=order_id, origClientOrderId=client_order_id)
    return client.get("/api/v3/order", params, signed=True)
