"""
Binance Spot MCP Server.

Exposes Binance Spot market data, account, trading and wallet operations as
Model Context Protocol tools.
"""

__version__ = "1.0.0"
