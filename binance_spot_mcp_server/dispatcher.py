"""
Tool dispatch.

Routes a tool name and argument mapping to the registered handler and turns
every outcome into a ``ToolResult``. Nothing raised by a handler escapes
``call_tool``.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from jsonschema import Draft7Validator

from binance_spot_mcp_server.client import BinanceClient
from binance_spot_mcp_server.exceptions import BinanceMCPError, InvalidArguments, UnknownTool
from binance_spot_mcp_server.registry import ToolDescriptor, get_tool, list_descriptors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a tool call: JSON text on success, a message on failure."""

    text: str
    is_error: bool = False
    error_type: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, payload: Any) -> "ToolResult":
        return cls(text=json.dumps(payload, indent=2, default=str))

    @classmethod
    def failure(cls, error_type: str, message: str, details: Optional[Dict[str, Any]] = None) -> "ToolResult":
        return cls(
            text=f"Error: {message}",
            is_error=True,
            error_type=error_type,
            details=details or {},
        )


def validate_arguments(descriptor: ToolDescriptor, arguments: Mapping[str, Any]) -> None:
    """
    Check arguments against the tool's input schema.

    Raises:
        InvalidArguments: Listing every problem found
    """
    validator = Draft7Validator(descriptor.input_schema)
    problems: List[str] = []
    for err in sorted(validator.iter_errors(dict(arguments)), key=lambda e: list(e.path)):
        path = ".".join(str(p) for p in err.path) if err.path else None
        problems.append(f"{path}: {err.message}" if path else err.message)

    if problems:
        raise InvalidArguments(descriptor.name, problems)


class ToolDispatcher:
    """Maps tool invocations onto ``BinanceClient`` calls."""

    def __init__(self, client: BinanceClient):
        self.client = client

    def list_tools(self) -> List[ToolDescriptor]:
        return list_descriptors()

    def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """
        Invoke a tool.

        Args:
            name: Registered tool name
            arguments: Tool arguments; ``None`` values count as omitted

        Returns:
            ToolResult: JSON-serialized response, or an error result
        """
        arguments = {key: value for key, value in (arguments or {}).items() if value is not None}
        logger.info(f"Tool called: {name} with arguments={sorted(arguments)}")

        try:
            tool = get_tool(name)
            if tool is None:
                raise UnknownTool(name)

            validate_arguments(tool.descriptor, arguments)
            result = tool.handler(self.client, **arguments)

        except BinanceMCPError as e:
            logger.warning(f"Tool {name} failed ({e.error_type}): {e.message}")
            return ToolResult.failure(e.error_type, e.message, e.details)

        except Exception as e:
            logger.error(f"Unexpected error in {name} tool: {str(e)}")
            return ToolResult.failure("tool_error", f"Tool execution failed: {str(e)}")

        logger.info(f"Tool {name} completed successfully")
        return ToolResult.success(result)
