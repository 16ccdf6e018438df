from __future__ import annotations

from typing import Any

from rich.markup import escape

from sspcheckin.config import CheckinConfig
from sspcheckin.console import console, err_console
from sspcheckin.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    PUSHPLUS_SUCCESS_CODE,
    PUSHPLUS_TEMPLATE,
    PUSHPLUS_URL,
)
from sspcheckin.errors import CheckinError
from sspcheckin.http_retry import send_request


def build_report(config: CheckinConfig, message: str) -> str:
    return f"账号: {config.user}<br>域名: {config.domain}<br>状态: {message}"


def build_pushplus_payload(token: str, title: str, content: str, topic: str = "") -> dict[str, Any]:
    payload: dict[str, Any] = {
        "token": token,
        "title": title,
        "content": content,
        "template": PUSHPLUS_TEMPLATE,
    }
    if topic:
        payload["topic"] = topic
    return payload


def send_pushplus(
    token: str,
    title: str,
    content: str,
    *,
    topic: str = "",
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
) -> bool:
    """Best effort: returns False on any failure and never raises for delivery problems."""
    if not token:
        return False

    try:
        resp = send_request(
            PUSHPLUS_URL,
            method="POST",
            headers={"Content-Type": "application/json"},
            body=build_pushplus_payload(token, title, content, topic),
            timeout_seconds=timeout_seconds,
        )
        if not resp.ok:
            err_console.print(f"[red]发送通知失败：HTTP {resp.status}[/red]")
            return False
        result = resp.json()
    except CheckinError as exc:
        err_console.print(f"[red]发送通知失败：{escape(str(exc))}[/red]")
        return False

    if result.get("code") != PUSHPLUS_SUCCESS_CODE:
        err_console.print(f"[red]发送通知失败：{escape(str(result.get('msg') or result.get('code')))}[/red]")
        return False

    console.print("PushPlus 通知已发出")
    return True
