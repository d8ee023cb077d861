"""
Encoding — Form-urlencodes request parameters.

The bytes returned here are both signed and sent, so the output must be
byte-identical for the same key order.
"""

from __future__ import annotations
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Union
from urllib.parse import urlencode

from .errors import InvalidParameterError

Scalar = Union[str, int, float, bool, Decimal]


def format_scalar(key: str, value) -> str:
    """Wire text for one parameter value."""
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (str, int, Decimal)):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    raise InvalidParameterError(
        f"Parameter {key!r} must be a scalar, got {type(value).__name__}"
    )


def encode_params(params: Optional[Mapping[str, Optional[Scalar]]]) -> bytes:
    """Serialize a key → scalar mapping into an urlencoded body. None values are dropped."""
    if not params:
        return b""

    pairs = []
    for key, value in params.items():
        if not isinstance(key, str):
            raise InvalidParameterError(f"Parameter names must be strings, got {key!r}")
        if value is None:
            continue
        pairs.append((key, format_scalar(key, value)))
    return urlencode(pairs).encode("ascii")


def join_values(value: Union[str, Iterable[str]]) -> str:
    """Flatten a list argument into Kraken's comma-separated form."""
    if isinstance(value, str):
        return value
    return ",".join(str(v).strip() for v in value)
