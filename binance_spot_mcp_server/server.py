"""
Binance Spot MCP Server implementation using FastMCP.

This module provides a Model Context Protocol (MCP) server for interacting with
the Binance Spot API. Each tool is registered from its registry descriptor, so
the input schema clients see is the one the dispatcher validates against. A
failed call is raised as ``ToolError`` so the MCP response is flagged as an
error.
"""

import sys
import asyncio
import logging
import argparse
from typing import Any, Dict

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult as MCPToolResult
from mcp.types import TextContent
from pydantic import PrivateAttr

from binance_spot_mcp_server import __version__
from binance_spot_mcp_server.client import BinanceClient
from binance_spot_mcp_server.config import BinanceConfig, load_config
from binance_spot_mcp_server.dispatcher import ToolDispatcher
from binance_spot_mcp_server.exceptions import ConfigurationError
from binance_spot_mcp_server.registry import ToolDescriptor


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr
)


logger = logging.getLogger(__name__)


INSTRUCTIONS = """
    This server provides access to the Binance Spot exchange.

    AVAILABLE TOOLS:

    Market Data:
    - get_price: Current price for a symbol
    - get_24hr_ticker: 24-hour price change statistics
    - get_klines: Candlestick bars as named records
    - get_order_book: Bids and asks as {price, quantity} levels
    - get_recent_trades: Recent public trades

    Account:
    - get_account: Balances and account flags
    - get_my_trades: Account trades for a symbol
    - get_open_orders: Open orders for a symbol or all symbols
    - get_all_orders: Order history for a symbol

    Trading:
    - place_order: Place a spot order
    - cancel_order: Cancel an order by order ID or client order ID
    - cancel_all_orders: Cancel every open order on a symbol
    - get_order: Order status

    Wallet:
    - get_deposit_address: Deposit address for a coin
    - get_deposit_history: Deposit history
    - get_withdraw_history: Withdrawal history
    - withdraw: Submit a withdrawal

    Successful calls return the exchange response as JSON text. Failed calls
    return an error result; nothing is retried.
    """


class DispatchedTool(Tool):
    """
    MCP tool backed by a registry descriptor.

    The advertised input schema is the descriptor's JSON schema as-is, so
    callers see the same allowed values and descriptions the dispatcher
    validates against.
    """

    _dispatcher: Any = PrivateAttr(default=None)

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor, dispatcher: ToolDispatcher) -> "DispatchedTool":
        tool = cls(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.input_schema,
        )
        tool._dispatcher = dispatcher
        return tool

    async def run(self, arguments: Dict[str, Any]) -> MCPToolResult:
        # requests is blocking; keep it off the event loop
        result = await asyncio.to_thread(self._dispatcher.call_tool, self.name, arguments)
        if result.is_error:
            raise ToolError(result.text)
        return MCPToolResult(content=[TextContent(type="text", text=result.text)])


def create_server(dispatcher: ToolDispatcher) -> FastMCP:
    """
    Build the FastMCP application around a dispatcher.

    Args:
        dispatcher: Dispatcher holding the configured Binance client

    Returns:
        FastMCP: Server with every registered tool attached
    """
    mcp = FastMCP(
        name="binance-spot-mcp-server",
        version=__version__,
        instructions=INSTRUCTIONS,
    )

    for descriptor in dispatcher.list_tools():
        mcp.add_tool(DispatchedTool.from_descriptor(descriptor, dispatcher))

    return mcp


def build_dispatcher(config: BinanceConfig) -> ToolDispatcher:
    """Wire a validated configuration into a client and dispatcher."""
    return ToolDispatcher(BinanceClient(config))


def main() -> None:
    """
    Main entry point for the Binance Spot MCP Server.

    Handles argument parsing, configuration validation, and server startup
    with proper error handling and exit codes.

    Exit Codes:
        0: Successful execution or user interruption
        1: Configuration error
        84: Server startup or runtime error
    """
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Binance Spot MCP Server - Model Context Protocol server for the Binance Spot API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
        Examples:
            %(prog)s                                              # Start with STDIO transport (default)
            %(prog)s --transport streamable-http                  # Start with streamable-http transport for testing
            %(prog)s --transport sse --port 8080 --host 0.0.0.0   # Custom SSE configuration
        """
    )

    parser.add_argument(
        "--transport",
        choices=["stdio", "streamable-http", "sse"],
        default="stdio",
        help="Transport method to use (stdio for MCP clients, streamable-http/sse for testing)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for HTTP transport (default: 8000)"
    )
    parser.add_argument(
        "--host",
        type=str,
        default="localhost",
        help="Host for HTTP transport (default: localhost)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set logging level (default: INFO)"
    )

    args = parser.parse_args()

    logging.getLogger().setLevel(getattr(logging, args.log_level))

    logger.info(f"Starting Binance Spot MCP Server with {args.transport} transport")

    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(str(e))
        logger.error("Required: BINANCE_API_KEY, BINANCE_API_SECRET")
        logger.error("Optional: BINANCE_TESTNET (true/false), BINANCE_RECV_WINDOW, BINANCE_TIMEOUT")
        sys.exit(1)

    logger.info(f"Configuration validated successfully: {config!r}")

    mcp = create_server(build_dispatcher(config))

    try:
        if args.transport == "stdio":
            logger.info("STDIO mode: Ready for MCP client connections")
            mcp.run(transport="stdio")
        else:
            logger.info(f"Initializing {args.transport} transport on {args.host}:{args.port}")
            mcp.run(transport=args.transport, port=args.port, host=args.host)

    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user (Ctrl+C)")
        sys.exit(0)

    except OSError as e:
        if "Address already in use" in str(e):
            logger.error(f"Port {args.port} is already in use. Please choose a different port.")
        else:
            logger.error(f"Network error during server startup: {str(e)}")
        sys.exit(84)

    except Exception as e:
        logger.error(f"Server startup failed with unexpected error: {str(e)}")
        sys.exit(84)


if __name__ == "__main__":
    main()
