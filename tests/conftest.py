import os

# Keep a developer's .env / shell credentials out of the tests
for _name in ("KRAKEN_API_KEY", "KRAKEN_API_SECRET", "KRAKEN_API_URL", "KRAKEN_API_VERSION"):
    os.environ[_name] = ""
os.environ["KRAKEN_SSL_VERIFY"] = "1"
os.environ["KRAKEN_TIMEOUT"] = "30"

import base64
from typing import Optional

import orjson
import pytest

from kraken_api import KrakenAdapter
from kraken_api.config import logger

logger.enabled = False

TEST_KEY = "test-api-key-0123456789"
TEST_SECRET_BYTES = b"\x01\x02secret-material\xfe\xff" * 4
TEST_SECRET = base64.b64encode(TEST_SECRET_BYTES).decode("ascii")
BASE_URL = "https://api.example.test"


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200):
        self.content = content
        self.status_code = status_code


class PostCapture:
    """Stands in for requests.Session.post and records every call."""

    def __init__(self, payload=None, *, content: Optional[bytes] = None, status_code: int = 200, exc=None):
        if content is None:
            content = orjson.dumps(payload if payload is not None else {"error": [], "result": {}})
        self.content = content
        self.status_code = status_code
        self.exc = exc
        self.calls: list[dict] = []

    def __call__(self, url, data=None, headers=None, timeout=None, **_kwargs):
        self.calls.append({"url": url, "data": data, "headers": dict(headers or {}), "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return FakeResponse(self.content, self.status_code)

    @property
    def last(self) -> dict:
        return self.calls[-1]


@pytest.fixture
def api():
    with KrakenAdapter(api_key=TEST_KEY, api_secret=TEST_SECRET, base_url=BASE_URL) as client:
        yield client


@pytest.fixture
def public_api():
    with KrakenAdapter(api_key="", api_secret="", base_url=BASE_URL) as client:
        yield client


@pytest.fixture
def capture(monkeypatch):
    """Install a PostCapture on a client: capture(api, payload=..., exc=...)."""

    def _install(client: KrakenAdapter, payload=None, **kwargs) -> PostCapture:
        cap = PostCapture(payload, **kwargs)
        monkeypatch.setattr(client.rest.session, "post", cap)
        return cap

    return _install
