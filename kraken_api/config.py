"""
Config — Loads .env credentials and exposes API endpoints.
Also home of the request signer and the shared async logger.
"""

import os
import hmac
import base64
import binascii
import hashlib
import queue
import threading
from pathlib import Path
from dotenv import load_dotenv

from .errors import ConfigurationError

# ── Load .env from same directory ────────────────────────────────────────────

_env_path = Path(__file__).parent / ".env"
load_dotenv(_env_path)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


# ── Credential Resolution ────────────────────────────────────────────────────

API_KEY = os.getenv("KRAKEN_API_KEY", "").strip()
API_SECRET = os.getenv("KRAKEN_API_SECRET", "").strip()

# ── Endpoints ────────────────────────────────────────────────────────────────

REST_BASE = os.getenv("KRAKEN_API_URL", "").strip().rstrip("/") or "https://api.kraken.com"
API_VERSION = os.getenv("KRAKEN_API_VERSION", "").strip() or "0"
SSL_VERIFY = _env_flag("KRAKEN_SSL_VERIFY", True)
REQUEST_TIMEOUT = _env_float("KRAKEN_TIMEOUT", 30.0)
USER_AGENT = "Kraken Python API Agent"

API_KEY_HEADER = "API-Key"
API_SIGN_HEADER = "API-Sign"

# ── HMAC Signing ─────────────────────────────────────────────────────────────


def decode_secret(secret: str) -> bytes:
    """Base64-decode the API secret. Raises ConfigurationError on bad input."""
    try:
        raw = base64.b64decode(secret.strip(), validate=True)
    except (binascii.Error, ValueError, AttributeError):
        raise ConfigurationError("API secret is not valid base64") from None
    if not raw:
        raise ConfigurationError("API secret is empty")
    return raw


def signature_bytes(secret: bytes, path: str, body: bytes, nonce: str) -> bytes:
    """HMAC-SHA512(secret, path + SHA256(nonce + body)), raw bytes."""
    digest = hashlib.sha256(nonce.encode("utf-8") + body).digest()
    return hmac.new(secret, path.encode("utf-8") + digest, hashlib.sha512).digest()


def sign(secret: bytes, path: str, body: bytes, nonce: str) -> str:
    """API-Sign header value: base64 of the raw HMAC-SHA512 signature."""
    return base64.b64encode(signature_bytes(secret, path, body, nonce)).decode("ascii")


# ── Async Logger ─────────────────────────────────────────────────────────────

class AsyncLogger:
    def __init__(self):
        self._q = queue.Queue()
        self._t = threading.Thread(target=self._worker, daemon=True)
        self._t.start()
        self.enabled = True

    def _worker(self):
        while True:
            msg = self._q.get()
            if msg is None:
                break
            print(msg, flush=True)
            self._q.task_done()

    def log(self, prefix, msg):
        if self.enabled:
            self._q.put(f"[{prefix}] {msg}")

    def shutdown(self):
        self._q.put(None)
        self._t.join(timeout=1.0)

logger = AsyncLogger()


# ── Validation ───────────────────────────────────────────────────────────────


def validate_credentials() -> bool:
    if not API_KEY or not API_SECRET:
        print("[Config] ⚠ No API Credentials. Private calls will fail.")
        return False
    try:
        decode_secret(API_SECRET)
    except ConfigurationError as e:
        print(f"[Config] ⚠ {e}")
        return False
    return True


def print_config():
    print()
    print(f"  ┌─ Kraken API Config ──────────────────────────┐")
    print(f"  │  REST:      {REST_BASE:<34}│")
    print(f"  │  Version:   {API_VERSION:<34}│")
    print(f"  │  SSL:       {'verify' if SSL_VERIFY else 'NO VERIFY':<34}│")
    print(f"  │  Timeout:   {REQUEST_TIMEOUT:<34}│")
    print(f"  │  API Key:   {'(set)' if API_KEY else '(none)':<34}│")
    print(f"  └───────────────────────────────────────────────┘")
    print()
