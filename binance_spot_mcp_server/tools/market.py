"""
Public market data tools.

Corresponds to Binance API market endpoints (unsigned):
    GET /api/v3/ticker/price
    GET /api/v3/ticker/24hr
    GET /api/v3/klines
    GET /api/v3/depth
    GET /api/v3/trades
"""

from typing import Any, Dict, List, Optional, Sequence

from binance_spot_mcp_server.client import BinanceClient
from binance_spot_mcp_server.utils import build_params


# Positional layout of a kline row as returned by /api/v3/klines
KLINE_FIELDS = (
    "openTime",
    "open",
    "high",
    "low",
    "close",
    "volume",
    "closeTime",
    "quoteAssetVolume",
    "numberOfTrades",
    "takerBuyBaseAssetVolume",
    "takerBuyQuoteAssetVolume",
)

KLINE_INTERVALS = [
    "1s", "1m", "3m", "5m", "15m", "30m",
    "1h", "2h", "4h", "6h", "8h", "12h",
    "1d", "3d", "1w", "1M",
]


def kline_to_dict(row: Sequence[Any]) -> Dict[str, Any]:
    """
    Map a positional kline row onto named fields.

    Binance appends an unused 12th field; anything past the eleventh
    position is ignored.
    """
    return {name: row[index] for index, name in enumerate(KLINE_FIELDS)}


def normalize_order_book(data: Dict[str, Any]) -> Dict[str, Any]:
    """Convert ``[price, quantity]`` pairs into named levels."""
    return {
        "lastUpdateId": data.get("lastUpdateId"),
        "bids": [{"price": level[0], "quantity": level[1]} for level in data.get("bids", [])],
        "asks": [{"price": level[0], "quantity": level[1]} for level in data.get("asks", [])],
    }


def get_price(client: BinanceClient, symbol: Optional[str] = None) -> Any:
    """
    Get the latest price for a symbol, or for every symbol when omitted.

    Returns:
        ``{"symbol", "price"}`` or a list of them
    """
    return client.get("/api/v3/ticker/price", build_params(symbol=symbol))


def get_24hr_ticker(client: BinanceClient, symbol: Optional[str] = None) -> Any:
    """Get 24 hour rolling window price change statistics."""
    return client.get("/api/v3/ticker/24hr", build_params(symbol=symbol))


def get_klines(
    client: BinanceClient,
    symbol: str,
    interval: str,
    limit: Optional[int] = None,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Get candlestick bars for a symbol.

    Args:
        client: Binance client
        symbol: Trading pair symbol (e.g., 'BTCUSDT')
        interval: Kline interval (e.g., '1m', '1h', '1d')
        limit: Number of bars (default 500, max 1000)
        start_time: Start time in milliseconds
        end_time: End time in milliseconds

    Returns:
        List of named kline records, oldest first
    """
    params = build_params(
        symbol=symbol,
        interval=interval,
        limit=limit,
        startTime=start_time,
        endTime=end_time,
    )
    rows = client.get("/api/v3/klines", params)
    return [kline_to_dict(row) for row in rows]


def get_order_book(client: BinanceClient, symbol: str, limit: Optional[int] = None) -> Dict[str, Any]:
    """
    Get the order book for a symbol.

    Returns:
        Dict with ``lastUpdateId`` and ``bids``/``asks`` as lists of
        ``{"price", "quantity"}``
    """
    data = client.get("/api/v3/depth", build_params(symbol=symbol, limit=limit))
    return normalize_order_book(data)


def get_recent_trades(client: BinanceClient, symbol: str, limit: Optional[int] = None) -> Any:
    """Get recent public trades for a symbol."""
    return client.get("/api/v3/trades", build_params(symbol=symbol, limit=limit))
