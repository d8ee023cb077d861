"""
Models — Data classes passed between the dispatcher layers.

Request side: Credentials → SignedRequest.
Response side: ApiResponse (the decoded envelope) and CallResult,
the non-raising outcome of a call.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional

from .errors import ApplicationError, ExchangeMessage, KrakenAPIError


# ── Standard Enums ───────────────────────────────────────────────────────────

Side = Literal["buy", "sell"]
OrderType = Literal[
    "market", "limit", "stop-loss", "take-profit", "stop-loss-profit",
    "stop-loss-profit-limit", "stop-loss-limit", "take-profit-limit",
    "trailing-stop", "trailing-stop-limit", "stop-loss-and-limit",
    "settle-position",
]
CloseTime = Literal["both", "open", "close"]
CallState = Literal["Succeeded", "TransportFailed", "DecodeFailed"]


# ── Request Objects ──────────────────────────────────────────────────────────

@dataclass(slots=True, frozen=True)
class Credentials:
    api_key: str
    secret: bytes = field(repr=False)

    def __repr__(self) -> str:
        return "Credentials(api_key=***, secret=***)"


@dataclass(slots=True, frozen=True)
class SignedRequest:
    """Everything needed for one POST. Built once per call, never reused."""
    url: str
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict, repr=False)
    path: str = ""
    nonce: Optional[str] = None

    @property
    def is_private(self) -> bool:
        return self.nonce is not None


# ── Response Objects ─────────────────────────────────────────────────────────

@dataclass(slots=True)
class ApiResponse:
    result: Any = None
    errors: list[str] = field(default_factory=list)
    status_code: int = 200

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> list[ExchangeMessage]:
        return [ExchangeMessage.parse(e) for e in self.errors]

    @property
    def application_error(self) -> Optional[ApplicationError]:
        """The exchange-side rejection, or None if the envelope carried no errors."""
        if self.ok:
            return None
        return ApplicationError(self.errors)

    def raise_for_error(self) -> Any:
        """Return result, or raise ApplicationError if the exchange reported errors."""
        err = self.application_error
        if err is not None:
            raise err
        return self.result


@dataclass(slots=True)
class CallResult:
    state: CallState
    response: Optional[ApiResponse] = None
    error: Optional[KrakenAPIError] = None

    @property
    def ok(self) -> bool:
        """Transport and decoding succeeded and the exchange reported no errors."""
        return self.state == "Succeeded" and self.response is not None and self.response.ok
