"""
Shared helpers for building request parameters.
"""

from typing import Any, Dict


def build_params(**params: Any) -> Dict[str, Any]:
    """
    Build a request parameter mapping, skipping values that are ``None``.

    Keyword order is kept, so the result can be signed directly. Falsy values
    such as ``0`` are kept; only ``None`` means "omitted".

    Example:
        >>> build_params(symbol="BTCUSDT", limit=None, status=0)
        {'symbol': 'BTCUSDT', 'status': 0}
    """
    return {key: value for key, value in params.items() if value is not None}
