"""
Kraken API — REST client for the Kraken exchange

Usage:
    from kraken_api import KrakenAdapter

    with KrakenAdapter(api_key="...", api_secret="...") as api:
        print(api.get_time().result)
        res = api.call_private("Balance")
        if res.ok:
            print(res.result)
        else:
            print(res.application_error)
"""

from .adapter import KrakenAdapter
from .rest_client import RestClient, RawResponse
from .nonce import NonceGenerator
from .encoding import encode_params, join_values
from .config import sign, signature_bytes, decode_secret
from .models import (
    ApiResponse, CallResult, Credentials, SignedRequest,
)
from .errors import (
    KrakenAPIError, ConfigurationError, InvalidParameterError,
    TransportError, DecodeError, ApplicationError, ExchangeMessage,
)

__all__ = [
    "KrakenAdapter",
    "RestClient", "RawResponse",
    "NonceGenerator",
    "encode_params", "join_values",
    "sign", "signature_bytes", "decode_secret",
    "ApiResponse", "CallResult", "Credentials", "SignedRequest",
    "KrakenAPIError", "ConfigurationError", "InvalidParameterError",
    "TransportError", "DecodeError", "ApplicationError", "ExchangeMessage",
]
