"""
Wallet tools.

Corresponds to Binance API capital endpoints (USER_DATA, signed):
    GET  /sapi/v1/capital/deposit/address
    GET  /sapi/v1/capital/deposit/hisrec
    GET  /sapi/v1/capital/withdraw/history
    POST /sapi/v1/capital/withdraw/apply
"""

import logging
from typing import Any, Optional, Union

from binance_spot_mcp_server.client import BinanceClient
from binance_spot_mcp_server.utils import build_params

logger = logging.getLogger(__name__)


# Deposit status codes (deposit/hisrec)
DEPOSIT_STATUS = {
    0: "pending",
    1: "success",
    6: "credited but cannot withdraw",
    7: "wrong deposit",
    8: "waiting user confirm",
}

# Withdrawal status codes (withdraw/history)
WITHDRAW_STATUS = {
    0: "Email Sent",
    1: "Cancelled",
    2: "Awaiting Approval",
    3: "Rejected",
    4: "Processing",
    5: "Failure",
    6: "Completed",
}


def get_deposit_address(client: BinanceClient, coin: str, network: Optional[str] = None) -> Any:
    """Get the deposit address for a coin, optionally on a specific network."""
    params = build_params(coin=coin, network=network)
    return client.get("/sapi/v1/capital/deposit/address", params, signed=True)


def get_deposit_history(
    client: BinanceClient,
    coin: Optional[str] = None,
    status: Optional[int] = None,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
    offset: Optional[int] = None,
    limit: Optional[int] = None,
) -> Any:
    """
    Get deposit history.

    Args:
        client: Binance client
        coin: Coin symbol (e.g., 'BTC')
        status: One of DEPOSIT_STATUS; ``0`` is sent, only ``None`` is omitted
        start_time: Start time in milliseconds
        end_time: End time in milliseconds
        offset: Pagination offset
        limit: Page size
    """
    params = build_params(
        coin=coin,
        status=status,
        startTime=start_time,
        endTime=end_time,
        offset=offset,
        limit=limit,
    )
    return client.get("/sapi/v1/capital/deposit/hisrec", params, signed=True)


def get_withdraw_history(
    client: BinanceClient,
    coin: Optional[str] = None,
    status: Optional[int] = None,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
    offset: Optional[int] = None,
    limit: Optional[int] = None,
) -> Any:
    """Get withdrawal history. ``status`` is one of WITHDRAW_STATUS."""
    params = build_params(
        coin=coin,
        status=status,
        startTime=start_time,
        endTime=end_time,
        offset=offset,
        limit=limit,
    )
    return client.get("/sapi/v1/capital/withdraw/history", params, signed=True)


def withdraw(
    client: BinanceClient,
    coin: str,
    address: str,
    amount: Union[str, float],
    network: Optional[str] = None,
    name: Optional[str] = None,
    address_tag: Optional[str] = None,
) -> Any:
    """
    Submit a withdrawal request.

    Returns:
        ``{"id": ...}`` identifying the withdrawal
    """
    logger.info(f"Submitting withdrawal: {amount} {coin} network={network}")

    params = build_params(
        coin=coin,
        address=address,
        amount=amount,
        network=network,
        name=name,
        addressTag=address_tag,
    )
    return client.post("/sapi/v1/capital/withdraw/apply", params)
