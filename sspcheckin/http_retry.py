from __future__ import annotations

import json
import time
from dataclasses import dataclass
from http.client import HTTPException
from typing import Any, Callable
from urllib.error import HTTPError
from urllib.request import Request, urlopen

from rich.markup import escape

from sspcheckin.console import err_console
from sspcheckin.constants import DEFAULT_RETRIES, DEFAULT_TIMEOUT_SECONDS, RETRY_BACKOFF_SECONDS
from sspcheckin.errors import CheckinError, ResponseError, TransientRequestError


@dataclass(frozen=True)
class HttpResponse:
    url: str
    status: int
    set_cookies: tuple[str, ...]
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> dict[str, Any]:
        try:
            loaded = json.loads(self.body)
        except json.JSONDecodeError as exc:
            raise ResponseError(f"返回内容不是 JSON（HTTP {self.status}）") from exc
        if not isinstance(loaded, dict):
            raise ResponseError(f"返回内容格式异常（HTTP {self.status}）")
        return loaded


def _encode_body(body: Any, headers: dict[str, str]) -> bytes | None:
    if body is None:
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")

    if not any(name.lower() == "content-type" for name in headers):
        headers["Content-Type"] = "application/json"
    return json.dumps(body, ensure_ascii=False).encode("utf-8")


def _read_response(url: str, resp) -> HttpResponse:
    set_cookies = tuple(resp.headers.get_all("set-cookie") or ()) if resp.headers else ()
    body = resp.read().decode("utf-8", errors="replace")
    return HttpResponse(url=url, status=int(resp.status), set_cookies=set_cookies, body=body)


def send_request(
    url: str,
    *,
    method: str = "GET",
    headers: dict[str, str] | None = None,
    body: Any = None,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
) -> HttpResponse:
    """Single attempt. 5xx and network failures raise TransientRequestError."""
    request_headers = dict(headers or {})
    data = _encode_body(body, request_headers)
    try:
        req = Request(url, data=data, headers=request_headers, method=method)
    except ValueError as exc:
        raise CheckinError(f"请求地址无效：{url}") from exc

    try:
        with urlopen(req, timeout=timeout_seconds) as resp:
            response = _read_response(url, resp)
    except HTTPError as exc:
        status = int(getattr(exc, "code", 0) or 0)
        if status >= 500:
            raise TransientRequestError(f"服务器错误：HTTP {status}") from exc
        try:
            body_text = exc.read().decode("utf-8", errors="replace")
        except (OSError, HTTPException):
            body_text = ""
        set_cookies = tuple(exc.headers.get_all("set-cookie") or ()) if exc.headers else ()
        return HttpResponse(url=url, status=status, set_cookies=set_cookies, body=body_text)
    except (OSError, HTTPException) as exc:
        raise TransientRequestError(f"网络错误：{exc}") from exc

    if response.status >= 500:
        raise TransientRequestError(f"服务器错误：HTTP {response.status}")
    return response


def request_with_retry(
    url: str,
    *,
    method: str = "GET",
    headers: dict[str, str] | None = None,
    body: Any = None,
    retries: int = DEFAULT_RETRIES,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> HttpResponse:
    """Call ``url`` up to ``retries`` times.

    Only TransientRequestError is retried, after a fixed pause. Any response
    below 500 comes back to the caller as is, so a 4xx must be judged from
    its body.
    """
    if retries < 1:
        raise ValueError("retries must be >= 1")

    for attempt in range(1, retries + 1):
        try:
            return send_request(url, method=method, headers=headers, body=body, timeout_seconds=timeout_seconds)
        except TransientRequestError as exc:
            if attempt == retries:
                raise
            err_console.print(f"[yellow]请求失败（{escape(str(exc))}），正在进行第 {attempt} 次重试...[/yellow]")
            sleep(RETRY_BACKOFF_SECONDS)
