"""
REST Client — HTTP transport for the Kraken API.

Owns one requests.Session for the client's lifetime:
- Connection pooling (thread-safe urllib3 pool, one connection per in-flight call)
- TLS peer verification policy
- Request timeout
- User-Agent

Only transport failures are classified here. Decoding belongs to the adapter.
"""

from __future__ import annotations
import socket
import requests
from typing import Mapping, Optional

from .config import REQUEST_TIMEOUT, SSL_VERIFY, USER_AGENT, logger
from .errors import TransportError


# ── Logging ──────────────────────────────────────────────────────────────────

def _log(msg: str):
    logger.log("REST", msg)


def _err(msg: str):
    logger.log("REST", f"❌ {msg}")


# ── Raw Response ─────────────────────────────────────────────────────────────

class RawResponse:
    """Status code and fully-read body of one HTTP exchange."""

    __slots__ = ("status_code", "content")

    def __init__(self, status_code: int, content: bytes):
        self.status_code = status_code
        self.content = content


# ── The Client ───────────────────────────────────────────────────────────────

class RestClient:
    """
    POST transport shared by public and private calls.

    Headers, body and timeout are passed per call and never written to the
    session, so concurrent callers only share the connection pool. Session
    cookies are not relied on.
    """

    def __init__(
        self,
        ssl_verify: bool = SSL_VERIFY,
        timeout: float = REQUEST_TIMEOUT,
        pool_size: int = 10,
    ):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.verify = ssl_verify
        self.session.headers.update({"User-Agent": USER_AGENT})

        # Disable Nagle's Algorithm (TCP_NODELAY) on pooled sockets
        adapter = requests.adapters.HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
        adapter.poolmanager.connection_pool_kw['socket_options'] = [
            (socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        ]
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)

        if not ssl_verify:
            _log("⚠ TLS peer verification disabled")

    def post(self, url: str, body: bytes, headers: Optional[Mapping[str, str]] = None) -> RawResponse:
        """POST a form body. Raises TransportError on connection/TLS/timeout failure."""
        hdrs = {"Content-Type": "application/x-www-form-urlencoded; charset=utf-8"}
        if headers:
            hdrs.update(headers)

        try:
            resp = self.session.post(url, data=body, headers=hdrs, timeout=self.timeout)
            # Read the whole body here so nothing is left on the pooled connection
            content = resp.content
        except requests.Timeout as e:
            _err(f"Timeout after {self.timeout}s: {url}")
            raise TransportError(f"Request timed out after {self.timeout}s", cause=e) from e
        except requests.exceptions.SSLError as e:
            _err(f"TLS failure: {url}")
            raise TransportError("TLS handshake or verification failed", cause=e) from e
        except requests.RequestException as e:
            _err(f"Network error: {type(e).__name__}")
            raise TransportError(f"HTTP request failed: {e}", cause=e) from e

        return RawResponse(resp.status_code, content)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "RestClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
