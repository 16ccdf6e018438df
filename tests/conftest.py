from __future__ import annotations

import io
import json
from email.message import Message
from urllib.error import HTTPError

import pytest

from sspcheckin import http_retry


def _headers(set_cookies=()):
    msg = Message()
    msg["Content-Type"] = "application/json"
    for value in set_cookies:
        msg["Set-Cookie"] = value
    return msg


class FakeResponse:
    def __init__(self, status: int, body: str, set_cookies=()):
        self.status = status
        self.headers = _headers(set_cookies)
        self._body = body.encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def reply(status: int = 200, body=None, set_cookies=()):
    if not isinstance(body, str):
        body = json.dumps(body if body is not None else {}, ensure_ascii=False)
    return status, body, tuple(set_cookies)


class FakeServer:
    """Scripted replies per URL, consumed in order; records every request."""

    def __init__(self):
        self.routes: dict[str, list] = {}
        self.requests = []

    def add(self, url: str, *replies) -> None:
        self.routes.setdefault(url, []).extend(replies)

    def calls_to(self, url: str) -> list:
        return [req for req in self.requests if req.full_url == url]

    def urlopen(self, req, timeout=None):
        self.requests.append(req)
        queue = self.routes.get(req.full_url)
        if not queue:
            raise AssertionError(f"unexpected request: {req.full_url}")
        item = queue.pop(0)
        if isinstance(item, BaseException):
            raise item
        status, body, set_cookies = item
        if status >= 400:
            raise HTTPError(req.full_url, status, "error", _headers(set_cookies), io.BytesIO(body.encode("utf-8")))
        return FakeResponse(status, body, set_cookies)


@pytest.fixture
def server(monkeypatch):
    fake = FakeServer()
    monkeypatch.setattr(http_retry, "urlopen", fake.urlopen)
    return fake


@pytest.fixture
def sleeps():
    recorded: list[float] = []
    return recorded


@pytest.fixture
def fake_sleep(sleeps):
    return sleeps.append
