"""
Binance Spot configuration.

This module loads API credentials and connection settings from the environment,
supporting both production and testnet endpoints. A single ``BinanceConfig`` is
built at process start and handed to the client; nothing else reads the
environment.
"""

import os
import logging
from typing import Optional, List, Mapping

from binance_spot_mcp_server.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class BinanceConfig:
    """Configuration for the Binance Spot MCP Server."""

    # Production URL
    BASE_URL = "https://api.binance.com"

    # Testnet URL
    TESTNET_BASE_URL = "https://testnet.binance.vision"

    def __init__(
        self,
        api_key: Optional[str],
        api_secret: Optional[str],
        testnet: bool = False,
        recv_window: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key
        self.api_secret = api_secret
        self.testnet = testnet
        self.recv_window = recv_window
        self.timeout = timeout

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BinanceConfig":
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            BinanceConfig: Unvalidated configuration

        Raises:
            ConfigurationError: If an optional numeric setting is malformed
        """
        env = os.environ if environ is None else environ

        return cls(
            api_key=env.get("BINANCE_API_KEY"),
            api_secret=env.get("BINANCE_API_SECRET"),
            testnet=env.get("BINANCE_TESTNET", "false").lower() == "true",
            recv_window=_optional_number(env, "BINANCE_RECV_WINDOW", int),
            timeout=_optional_number(env, "BINANCE_TIMEOUT", float),
        )

    @property
    def base_url(self) -> str:
        """Get appropriate base URL based on testnet setting."""
        if self.testnet:
            return self.TESTNET_BASE_URL
        return self.BASE_URL

    def is_valid(self) -> bool:
        """Check if configuration is valid."""
        return bool(self.api_key and self.api_secret)

    def get_validation_errors(self) -> List[str]:
        """Get list of configuration validation errors."""
        errors = []
        if not self.api_key:
            errors.append("BINANCE_API_KEY environment variable is required")
        if not self.api_secret:
            errors.append("BINANCE_API_SECRET environment variable is required")
        return errors

    def validate(self) -> "BinanceConfig":
        """
        Ensure both credentials are present.

        Returns:
            BinanceConfig: self, for chaining

        Raises:
            ConfigurationError: If either credential is missing or empty
        """
        if not self.is_valid():
            error_msg = "Invalid Binance configuration: " + ", ".join(self.get_validation_errors())
            logger.error(error_msg)
            raise ConfigurationError(error_msg)
        return self

    def __repr__(self) -> str:
        return (
            f"BinanceConfig(base_url={self.base_url!r}, testnet={self.testnet}, "
            f"recv_window={self.recv_window}, timeout={self.timeout})"
        )


def _optional_number(env: Mapping[str, str], name: str, cast):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def load_config() -> BinanceConfig:
    """
    Load and validate configuration from the process environment.

    Raises:
        ConfigurationError: If credentials are missing or settings are malformed
    """
    return BinanceConfig.from_env().validate()
