"""
Error taxonomy for the Binance Spot MCP Server.

Every error carries an ``error_type`` string that is reported back to MCP
clients alongside the human-readable message.
"""

from typing import Any, Dict, List, Optional


class BinanceMCPError(Exception):
    """Base class for all server errors."""

    error_type = "tool_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(BinanceMCPError):
    """Required configuration is missing or malformed. Fatal at startup."""

    error_type = "configuration_error"


class UnknownTool(BinanceMCPError):
    """The requested tool name is not in the registry."""

    error_type = "unknown_tool"

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}", {"name": name})
        self.name = name


class InvalidArguments(BinanceMCPError):
    """Tool arguments do not match the tool's input schema."""

    error_type = "invalid_arguments"

    def __init__(self, tool: str, problems: List[str]):
        super().__init__(
            f"Invalid arguments for {tool}: " + "; ".join(problems),
            {"tool": tool, "problems": problems},
        )
        self.tool = tool
        self.problems = problems


class RequestFailed(BinanceMCPError):
    """
    An outbound HTTP call failed.

    Raised for transport errors (connection refused, timeout, ...) and for
    non-2xx responses. ``status_code`` and ``code`` are ``None`` when the
    request never produced a response.
    """

    error_type = "request_failed"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[int] = None,
        payload: Any = None,
    ):
        details: Dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if code is not None:
            details["code"] = code
        super().__init__(message, details)
        self.status_code = status_code
        self.code = code
        self.payload = payload
