"""
Nonce — Strictly increasing request identifiers for private calls.

Kraken rejects any private request whose nonce is not greater than the last
one it saw for the key. Nonces are built as decimal strings:
whole seconds followed by the microsecond part padded to six digits.
"""

from __future__ import annotations
import time
import threading
from typing import Callable, Optional

from .config import logger


def _warn(msg: str):
    logger.log("NONCE", f"⚠ {msg}")


def _clock_nonce(now_ns: int) -> int:
    seconds, micros = divmod(now_ns // 1000, 1_000_000)
    return int(f"{seconds}{micros:06d}")


class NonceGenerator:
    """Thread-safe, monotonic nonce source (one per credential set)."""

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self._clock = clock or time.time_ns
        self._lock = threading.Lock()
        self._last = 0

    @property
    def last(self) -> Optional[str]:
        """Last issued or observed nonce, or None."""
        with self._lock:
            return str(self._last) if self._last else None

    def next(self) -> str:
        with self._lock:
            candidate = _clock_nonce(self._clock())
            if candidate <= self._last:
                # Same microsecond, or the wall clock stepped back
                if self._last - candidate > 1_000_000:
                    _warn(f"Clock behind last nonce by {(self._last - candidate) / 1e6:.3f}s, clamping")
                candidate = self._last + 1
            self._last = candidate
            return str(candidate)

    def observe(self, nonce) -> None:
        """Record a caller-supplied nonce so generated values stay above it."""
        try:
            value = int(str(nonce))
        except ValueError:
            _warn(f"Caller nonce {nonce!r} is not a decimal integer")
            return

        with self._lock:
            if value <= self._last:
                _warn(f"Caller nonce {value} does not exceed last nonce {self._last}")
                return
            self._last = value
