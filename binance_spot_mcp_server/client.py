"""
HTTP client for the Binance Spot REST API.

Handles the API key header, HMAC SHA256 request signing, and translation of
transport failures and non-2xx responses into ``RequestFailed``. Every call
issues exactly one HTTP request; nothing is retried.
"""

import time
import hmac
import hashlib
import logging
from decimal import Decimal
from typing import Dict, Any, Optional, List, Tuple

import requests

from binance_spot_mcp_server.config import BinanceConfig
from binance_spot_mcp_server.exceptions import RequestFailed

logger = logging.getLogger(__name__)


def format_param(value: Any) -> str:
    """
    Render a parameter value the way it appears in the query string.

    Integral floats lose their trailing ``.0`` so that ``100.0`` and ``100``
    sign identically. Floats are always written positionally: ``0.00001`` is
    sent as ``0.00001``, never ``1e-05``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, float):
        return format(Decimal(repr(value)), "f")
    return str(value)


def build_query_string(params: Dict[str, Any]) -> str:
    """
    Serialize parameters as ``key=value`` pairs joined by ``&``.

    Pairs keep the mapping's insertion order; nothing is sorted or
    URL-encoded.
    """
    return "&".join(f"{key}={format_param(value)}" for key, value in params.items())


def create_signature(secret: str, query_string: str) -> str:
    """
    Create HMAC SHA256 signature for Binance API.

    Args:
        secret: API secret key
        query_string: Query string to sign

    Returns:
        str: Lowercase hexadecimal signature
    """
    return hmac.new(
        secret.encode('utf-8'),
        query_string.encode('utf-8'),
        hashlib.sha256
    ).hexdigest()


class BinanceClient:
    """
    HTTP client for the Binance Spot API with request signing.
    """

    def __init__(self, config: BinanceConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            "X-MBX-APIKEY": self.config.api_key,
        })

    @staticmethod
    def _timestamp() -> int:
        return int(time.time() * 1000)

    def sign_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Add timestamp and signature to request parameters.

        The caller's keys keep their order; ``timestamp`` (and ``recvWindow``
        when configured) follow, and ``signature`` is appended last.

        Args:
            params: Request parameters

        Returns:
            New dict with timestamp and signature added
        """
        signed = dict(params)
        signed["timestamp"] = self._timestamp()
        if self.config.recv_window is not None:
            signed["recvWindow"] = self.config.recv_window

        signed["signature"] = create_signature(self.config.api_secret, build_query_string(signed))
        return signed

    @staticmethod
    def _error_from_response(response: requests.Response, method: str, endpoint: str) -> RequestFailed:
        try:
            data = response.json()
        except ValueError:
            data = {"msg": response.text}

        code = None
        message = None
        if isinstance(data, dict):
            code = data.get("code")
            message = data.get("msg")
        if not message:
            message = response.reason or "request failed"

        text = f"{method} {endpoint} failed with HTTP {response.status_code}: {message}"
        if code is not None:
            text += f" (code {code})"
        return RequestFailed(text, status_code=response.status_code, code=code, payload=data)

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        signed: bool = False,
    ) -> Any:
        """
        Make a single API request.

        All parameters travel in the query string, for POST and DELETE too.

        Args:
            method: HTTP method (GET, POST, DELETE)
            endpoint: API endpoint (e.g., /api/v3/order)
            params: Request parameters, already stripped of omitted optionals
            signed: Whether to add timestamp and signature

        Returns:
            Decoded JSON response body

        Raises:
            RequestFailed: On transport errors, non-2xx responses, or a body
                that is not JSON
        """
        method = method.upper()
        url = f"{self.config.base_url}{endpoint}"
        params = params or {}

        if signed:
            params = self.sign_params(params)

        query: List[Tuple[str, str]] = [(key, format_param(value)) for key, value in params.items()]

        logger.debug(
            f"{method} {endpoint} params={[key for key, _ in query if key != 'signature']}"
        )

        try:
            response = self.session.request(method, url, params=query, timeout=self.config.timeout)
        except requests.exceptions.Timeout as e:
            logger.error(f"{method} {endpoint} timed out: {e}")
            raise RequestFailed(f"{method} {endpoint} timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {endpoint} failed: {e}")
            raise RequestFailed(f"{method} {endpoint} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            error = self._error_from_response(response, method, endpoint)
            logger.error(error.message)
            raise error

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{method} {endpoint} returned a non-JSON body")
            raise RequestFailed(
                f"{method} {endpoint} returned a non-JSON body",
                status_code=response.status_code,
                payload=response.text,
            ) from e

    def get(self, endpoint: str, params: Optional[Dict] = None, signed: bool = False) -> Any:
        """Make a GET request."""
        return self.request("GET", endpoint, params, signed)

    def post(self, endpoint: str, params: Optional[Dict] = None, signed: bool = True) -> Any:
        """Make a POST request (signed by default)."""
        return self.request("POST", endpoint, params, signed)

    def delete(self, endpoint: str, params: Optional[Dict] = None, signed: bool = True) -> Any:
        """Make a DELETE request (signed by default)."""
        return self.request("DELETE", endpoint, params, signed)
