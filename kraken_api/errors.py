"""
Errors — Classified failures raised by the Kraken client.

    KrakenAPIError
    ├── ConfigurationError       bad secret, missing credentials, bad input
    │   └── InvalidParameterError
    ├── TransportError           connection / TLS / timeout
    ├── DecodeError              body is not a Kraken envelope
    └── ApplicationError         envelope carries exchange error codes
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, frozen=True)
class ExchangeMessage:
    """One Kraken error string, e.g. "EOrder:Insufficient funds"."""
    severity: str   # "E" error, "W" warning
    category: str   # "API", "Order", "General", ...
    message: str

    @classmethod
    def parse(cls, raw: str) -> "ExchangeMessage":
        head, sep, tail = raw.partition(":")
        if not sep or not head or head[0] not in "EW":
            return cls(severity="E", category="", message=raw)
        return cls(severity=head[0], category=head[1:], message=tail)

    def __str__(self) -> str:
        if not self.category:
            return self.message
        return f"{self.severity}{self.category}:{self.message}"


class KrakenAPIError(Exception):
    """Base exception for all client errors."""


class ConfigurationError(KrakenAPIError):
    """Client misconfiguration. Fatal, not retryable."""


class InvalidParameterError(ConfigurationError):
    """A request parameter is not a scalar (programmer error)."""


class TransportError(KrakenAPIError):
    """The HTTP round trip failed before a response was received."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class DecodeError(KrakenAPIError):
    """The response body is not a well-formed Kraken envelope."""

    def __init__(self, message: str, status_code: Optional[int] = None, body_preview: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body_preview = body_preview


class ApplicationError(KrakenAPIError):
    """The exchange rejected the request (e.g. invalid nonce, insufficient funds)."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Unknown exchange error")

    @property
    def messages(self) -> list[ExchangeMessage]:
        return [ExchangeMessage.parse(e) for e in self.errors]

    def has(self, category: str, message: Optional[str] = None) -> bool:
        """True if any error matches the category (and message, if given)."""
        for m in self.messages:
            if m.category == category and (message is None or m.message == message):
                return True
        return False

    @property
    def is_invalid_nonce(self) -> bool:
        return self.has("API", "Invalid nonce")
