"""
Adapter — The Request Dispatcher.

Single entry point for every Kraken REST call. Routes to the public or
private flow, injects nonces, signs private requests with API-Key/API-Sign
headers, and decodes the {"error": [...], "result": {...}} envelope.

Failures are classified:
- TransportError: the HTTP round trip failed (raised)
- DecodeError: the body is not a Kraken envelope (raised)
- ApplicationError: the exchange rejected the call (returned on ApiResponse)
"""

from __future__ import annotations
import orjson as json
from typing import Iterable, Mapping, Optional, Union

from .config import (
    API_KEY,
    API_SECRET,
    API_KEY_HEADER,
    API_SIGN_HEADER,
    API_VERSION,
    REQUEST_TIMEOUT,
    REST_BASE,
    SSL_VERIFY,
    decode_secret,
    logger,
    sign,
)
from .encoding import Scalar, encode_params, format_scalar, join_values
from .errors import ConfigurationError, DecodeError, TransportError
from .models import (
    ApiResponse,
    CallResult,
    CloseTime,
    Credentials,
    OrderType,
    Side,
    SignedRequest,
)
from .nonce import NonceGenerator
from .rest_client import RawResponse, RestClient

Params = Optional[Mapping[str, Optional[Scalar]]]
ListArg = Union[str, Iterable[str]]


# ── Logging ──────────────────────────────────────────────────────────────────

def _log(msg: str):
    logger.log("ADAPTER", msg)


def _warn(msg: str):
    logger.log("ADAPTER", f"⚠ {msg}")


def _opt_list(value: Optional[ListArg]) -> Optional[str]:
    if value is None:
        return None
    joined = join_values(value)
    return joined or None


# ── The Adapter ──────────────────────────────────────────────────────────────

class KrakenAdapter:
    """
    Kraken REST client: public market data and signed private calls.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        version: Optional[str] = None,
        ssl_verify: bool = SSL_VERIFY,
        timeout: float = REQUEST_TIMEOUT,
        nonce_generator: Optional[NonceGenerator] = None,
    ):
        self.name = "KrakenAdapter"

        key = (API_KEY if api_key is None else api_key).strip()
        secret = (API_SECRET if api_secret is None else api_secret).strip()
        if bool(key) != bool(secret):
            raise ConfigurationError("API key and API secret must be given together")

        # Decode now: a bad secret must fail before any network call
        self._credentials: Optional[Credentials] = None
        if secret:
            self._credentials = Credentials(api_key=key, secret=decode_secret(secret))

        self._base = (base_url or REST_BASE).rstrip("/")
        self._version = str(version or API_VERSION)
        self._nonces = nonce_generator or NonceGenerator()
        self.rest = RestClient(ssl_verify=ssl_verify, timeout=timeout)

        _log(
            f"Ready: {self._base}/{self._version} "
            f"(credentials={'yes' if self._credentials else 'no'})"
        )

    # ── Lifecycle ────────────────────────────────────────────────────────────

    def close(self) -> None:
        self.rest.close()

    def __enter__(self) -> "KrakenAdapter":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def has_credentials(self) -> bool:
        return self._credentials is not None

    @property
    def nonces(self) -> NonceGenerator:
        return self._nonces

    # ── Dispatch ─────────────────────────────────────────────────────────────

    def call_public(self, method: str, params: Params = None) -> ApiResponse:
        """POST {base}/{version}/public/{method}. Raises TransportError / DecodeError."""
        return self.send(self.build_public(method, params))

    def call_private(self, method: str, params: Params = None) -> ApiResponse:
        """Signed POST {base}/{version}/private/{method}. Raises TransportError / DecodeError."""
        return self.send(self.build_private(method, params))

    def try_public(self, method: str, params: Params = None) -> CallResult:
        return self._attempt(self.call_public, method, params)

    def try_private(self, method: str, params: Params = None) -> CallResult:
        return self._attempt(self.call_private, method, params)

    def build_public(self, method: str, params: Params = None) -> SignedRequest:
        path = f"/{self._version}/public/{method}"
        return SignedRequest(url=f"{self._base}{path}", body=encode_params(params), path=path)

    def build_private(self, method: str, params: Params = None) -> SignedRequest:
        """Inject the nonce, encode once, and sign exactly the bytes that will be sent."""
        creds = self._credentials
        if creds is None:
            raise ConfigurationError(f"Private method {method!r} requires API credentials")

        payload = dict(params or {})
        if payload.get("nonce") is None:
            payload["nonce"] = self._nonces.next()
            nonce = payload["nonce"]
        else:
            # Same rendering as the body, so the signed nonce is the sent one
            nonce = format_scalar("nonce", payload["nonce"])
            self._nonces.observe(nonce)

        body = encode_params(payload)
        path = f"/{self._version}/private/{method}"
        headers = {
            API_KEY_HEADER: creds.api_key,
            API_SIGN_HEADER: sign(creds.secret, path, body, nonce),
        }
        return SignedRequest(
            url=f"{self._base}{path}", body=body, headers=headers, path=path, nonce=nonce,
        )

    def send(self, req: SignedRequest) -> ApiResponse:
        """POST a built request and decode the envelope."""
        raw = self.rest.post(req.url, req.body, req.headers)
        res = self._decode(raw, req.path)
        if not res.ok:
            _warn(f"{req.path} rejected: {', '.join(res.errors)}")
        return res

    # ── Internal ─────────────────────────────────────────────────────────────

    @staticmethod
    def _decode(raw: RawResponse, path: str = "") -> ApiResponse:
        preview = raw.content[:200].decode("utf-8", "replace")
        try:
            data = json.loads(raw.content)
        except json.JSONDecodeError as e:
            raise DecodeError(
                f"{path}: response is not JSON (HTTP {raw.status_code})",
                status_code=raw.status_code, body_preview=preview,
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get("error"), list):
            raise DecodeError(
                f"{path}: response has no error list (HTTP {raw.status_code})",
                status_code=raw.status_code, body_preview=preview,
            )

        errors = [str(e) for e in data["error"]]
        if not errors and "result" not in data:
            raise DecodeError(
                f"{path}: response has neither errors nor a result",
                status_code=raw.status_code, body_preview=preview,
            )

        return ApiResponse(result=data.get("result"), errors=errors, status_code=raw.status_code)

    @staticmethod
    def _attempt(call, method: str, params: Params) -> CallResult:
        try:
            return CallResult(state="Succeeded", response=call(method, params))
        except TransportError as e:
            return CallResult(state="TransportFailed", error=e)
        except DecodeError as e:
            return CallResult(state="DecodeFailed", error=e)

    # ── Public Endpoints ─────────────────────────────────────────────────────

    def get_time(self) -> ApiResponse:
        """Server time (unixtime + rfc1123)."""
        return self.call_public("Time")

    def get_assets(
        self, asset: Optional[ListArg] = None, aclass: str = "currency", info: str = "info",
    ) -> ApiResponse:
        return self.call_public("Assets", {
            "info": info,
            "aclass": aclass,
            "asset": _opt_list(asset),
        })

    def get_asset_pairs(self, pair: Optional[ListArg] = None, info: str = "info") -> ApiResponse:
        """Tradable pairs. info: info | leverage | fees | margin."""
        return self.call_public("AssetPairs", {"info": info, "pair": _opt_list(pair)})

    def get_ticker(self, pair: ListArg = "XXBTZEUR") -> ApiResponse:
        return self.call_public("Ticker", {"pair": join_values(pair)})

    def get_ohlc(self, pair: str = "XXBTZEUR", interval: int = 1, since: Optional[int] = None) -> ApiResponse:
        """Candles. interval (minutes): 1, 5, 15, 30, 60, 240, 1440, 10080, 21600."""
        return self.call_public("OHLC", {"pair": pair, "interval": interval, "since": since})

    def get_order_book(self, pair: str = "XXBTZEUR", count: Optional[int] = None) -> ApiResponse:
        return self.call_public("Depth", {"pair": pair, "count": count})

    def get_recent_trades(self, pair: str = "XXBTZEUR", since: Optional[str] = None) -> ApiResponse:
        return self.call_public("Trades", {"pair": pair, "since": since})

    def get_recent_spread(self, pair: str = "XXBTZEUR", since: Optional[str] = None) -> ApiResponse:
        return self.call_public("Spread", {"pair": pair, "since": since})

    # ── Private Endpoints: Account ───────────────────────────────────────────

    def get_account_balance(self) -> ApiResponse:
        return self.call_private("Balance")

    def get_trade_balance(self, asset: str = "ZUSD", aclass: str = "currency") -> ApiResponse:
        return self.call_private("TradeBalance", {"asset": asset, "aclass": aclass})

    def get_open_orders(self, trades: bool = False, userref: Optional[int] = None) -> ApiResponse:
        return self.call_private("OpenOrders", {"trades": trades, "userref": userref})

    def get_closed_orders(
        self,
        trades: bool = False,
        userref: Optional[int] = None,
        start: Optional[Union[int, str]] = None,
        end: Optional[Union[int, str]] = None,
        ofs: Optional[int] = None,
        closetime: CloseTime = "both",
    ) -> ApiResponse:
        """start/end accept a unix timestamp or an order txid."""
        return self.call_private("ClosedOrders", {
            "trades": trades,
            "userref": userref,
            "start": start,
            "end": end,
            "ofs": ofs,
            "closetime": closetime,
        })

    def query_orders(
        self, txid: Optional[ListArg] = None, trades: bool = False, userref: Optional[int] = None,
    ) -> ApiResponse:
        """Info on up to 20 orders by txid."""
        return self.call_private("QueryOrders", {
            "trades": trades,
            "txid": _opt_list(txid),
            "userref": userref,
        })

    def get_trades_history(
        self,
        type: str = "all",
        trades: bool = False,
        start: Optional[Union[int, str]] = None,
        end: Optional[Union[int, str]] = None,
        ofs: Optional[int] = None,
    ) -> ApiResponse:
        """type: all | any position | closed position | closing position | no position."""
        return self.call_private("TradesHistory", {
            "type": None if type == "all" else type,
            "trades": trades,
            "start": start,
            "end": end,
            "ofs": ofs,
        })

    def query_trades(self, txid: ListArg, trades: bool = False) -> ApiResponse:
        return self.call_private("QueryTrades", {"txid": join_values(txid), "trades": trades})

    def get_open_positions(self, txid: Optional[ListArg] = None, docalcs: bool = False) -> ApiResponse:
        return self.call_private("OpenPositions", {"txid": _opt_list(txid), "docalcs": docalcs})

    def get_ledgers(
        self,
        asset: Optional[ListArg] = None,
        type: str = "all",
        aclass: str = "currency",
        start: Optional[Union[int, str]] = None,
        end: Optional[Union[int, str]] = None,
        ofs: Optional[int] = None,
    ) -> ApiResponse:
        """type: all | deposit | withdrawal | trade | margin."""
        return self.call_private("Ledgers", {
            "aclass": aclass,
            "asset": _opt_list(asset),
            "type": None if type == "all" else type,
            "start": start,
            "end": end,
            "ofs": ofs,
        })

    def query_ledgers(self, ledger_id: ListArg) -> ApiResponse:
        return self.call_private("QueryLedgers", {"id": join_values(ledger_id)})

    def get_trade_volume(self, pair: Optional[ListArg] = None, fee_info: bool = True) -> ApiResponse:
        return self.call_private("TradeVolume", {"pair": _opt_list(pair), "fee-info": fee_info})

    # ── Private Endpoints: Trading ───────────────────────────────────────────

    def add_order(
        self,
        pair: str,
        type: Side,
        ordertype: OrderType = "market",
        volume: Optional[Union[float, str]] = None,
        price: Optional[Union[float, str]] = None,
        price2: Optional[Union[float, str]] = None,
        leverage: Optional[str] = None,
        oflags: Optional[ListArg] = None,
        starttm: Optional[str] = None,
        expiretm: Optional[str] = None,
        userref: Optional[int] = None,
        validate: bool = False,
    ) -> ApiResponse:
        """
        Place an order. price/price2 meaning depends on ordertype
        (e.g. stop-loss-limit: price = trigger, price2 = limit).
        oflags: viqc, fcib, fciq, nompp, post.
        validate=True only validates inputs, nothing is submitted.
        """
        return self.call_private("AddOrder", {
            "pair": pair,
            "type": type,
            "ordertype": ordertype,
            "volume": volume,
            "price": price,
            "price2": price2,
            "leverage": leverage,
            "oflags": _opt_list(oflags),
            "starttm": starttm,
            "expiretm": expiretm,
            "userref": userref,
            "validate": True if validate else None,
        })

    def cancel_order(self, txid: str) -> ApiResponse:
        return self.call_private("CancelOrder", {"txid": txid})
