"""Shared fixtures: a BinanceClient wired to a mocked requests session."""

from unittest.mock import Mock, patch

import pytest

from binance_spot_mcp_server.client import BinanceClient
from binance_spot_mcp_server.config import BinanceConfig


FIXED_TIMESTAMP = 1700000000000


def make_response(payload=None, status_code=200, reason="OK", text=None):
    """Build a fake requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    response.text = text if text is not None else str(payload)
    return response


@pytest.fixture
def config():
    return BinanceConfig(api_key="test-key", api_secret="test-secret")


@pytest.fixture
def session():
    mock_session = Mock()
    mock_session.headers = {}
    mock_session.request.return_value = make_response({})
    return mock_session


@pytest.fixture
def client(config, session):
    with patch.object(BinanceClient, "_timestamp", return_value=FIXED_TIMESTAMP):
        yield BinanceClient(config, session=session)


def sent_request(session):
    """Return (method, url, ordered params) of the last request issued."""
    args, kwargs = session.request.call_args
    method, url = args
    return method, url, kwargs["params"]
