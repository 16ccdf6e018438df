#!/usr/bin/env python3
from __future__ import annotations

import argparse
import random
import sys
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from rich.markup import escape

from sspcheckin.config import CheckinConfig, load_config
from sspcheckin.console import console, err_console
from sspcheckin.constants import (
    CHECKIN_DELAY_RANGE_SECONDS,
    CHECKIN_PATH,
    DEFAULT_CONFIG_FILE,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    LOGIN_PATH,
    LOGIN_SUCCESS_RET,
    REPORT_TITLE,
)
from sspcheckin.cookies import cookie_header_from_set_cookie
from sspcheckin.errors import AuthError, CheckinError, ConfigError
from sspcheckin.http_retry import request_with_retry
from sspcheckin.notify import build_report, send_pushplus


class ExitCodes:
    OK = 0
    ERROR = 1


@dataclass(frozen=True)
class CheckinOutcome:
    success: bool
    message: str


def sample_checkin_delay(rng: random.Random | None = None) -> float:
    """Seconds to wait between login and check-in, uniform over the closed range."""
    low, high = CHECKIN_DELAY_RANGE_SECONDS
    source = rng if rng is not None else random
    return source.uniform(low, high)


def _login(
    config: CheckinConfig,
    *,
    retries: int,
    timeout_seconds: int,
    user_agent: str,
    sleep: Callable[[float], None],
) -> str:
    resp = request_with_retry(
        f"{config.base_url}{LOGIN_PATH}",
        method="POST",
        headers={"Content-Type": "application/json", "User-Agent": user_agent},
        body={"email": config.user, "passwd": config.password},
        retries=retries,
        timeout_seconds=timeout_seconds,
        sleep=sleep,
    )
    result = resp.json()
    # The body decides, not the status code.
    if result.get("ret") != LOGIN_SUCCESS_RET:
        raise AuthError(f"登录失败: {result.get('msg')}")
    return cookie_header_from_set_cookie(resp.set_cookies)


def _checkin(
    config: CheckinConfig,
    cookie: str,
    *,
    retries: int,
    timeout_seconds: int,
    user_agent: str,
    sleep: Callable[[float], None],
) -> str:
    resp = request_with_retry(
        f"{config.base_url}{CHECKIN_PATH}",
        method="POST",
        headers={"Cookie": cookie, "User-Agent": user_agent},
        retries=retries,
        timeout_seconds=timeout_seconds,
        sleep=sleep,
    )
    result = resp.json()
    msg = result.get("msg")
    console.print(f"签到结果: {escape(str(msg))}")
    return str(msg) if msg else ""


def run_checkin(
    config: CheckinConfig,
    *,
    retries: int = DEFAULT_RETRIES,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
    user_agent: str = DEFAULT_USER_AGENT,
    sleep: Callable[[float], None] | None = None,
    rng: random.Random | None = None,
) -> CheckinOutcome:
    """Login, wait, check in, then always send one report.

    No error escapes; each one becomes the failure message of the outcome.
    """
    sleep = sleep or time.sleep
    outcome = CheckinOutcome(success=False, message="❌ 失败: 未知错误")
    try:
        missing = config.missing_fields()
        if missing:
            raise ConfigError(f"配置缺失：请设置 {', '.join(missing)}")

        console.print(f"[{datetime.now().strftime('%H:%M:%S')}] 开始执行签到: {config.user}", markup=False)

        cookie = _login(config, retries=retries, timeout_seconds=timeout_seconds, user_agent=user_agent, sleep=sleep)
        sleep(sample_checkin_delay(rng))
        msg = _checkin(
            config,
            cookie,
            retries=retries,
            timeout_seconds=timeout_seconds,
            user_agent=user_agent,
            sleep=sleep,
        )
        outcome = CheckinOutcome(success=True, message=f"🎉 {msg or '签到成功'}")
    except CheckinError as exc:
        outcome = CheckinOutcome(success=False, message=f"❌ 失败: {exc}")
        err_console.print(outcome.message, markup=False)
    except Exception as exc:
        outcome = CheckinOutcome(success=False, message=f"❌ 失败: {str(exc) or type(exc).__name__}")
        err_console.print(f"{outcome.message}（{type(exc).__name__}）", markup=False)
    finally:
        send_pushplus(
            config.pushplus_token,
            REPORT_TITLE,
            build_report(config, outcome.message),
            topic=config.pushplus_topic,
            timeout_seconds=timeout_seconds,
        )
    return outcome


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="SSPanel 每日自动签到（登录 + 签到 + PushPlus 通知）。")
    parser.add_argument(
        "--config-file",
        default=DEFAULT_CONFIG_FILE,
        help="备选配置文件，环境变量优先；登录 shell 通常已设置 USER，会覆盖文件中的 user（默认：%(default)s）",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=DEFAULT_RETRIES,
        help="单个请求最多尝试次数（默认：%(default)s）",
    )
    parser.add_argument(
        "--timeout-seconds",
        type=int,
        default=DEFAULT_TIMEOUT_SECONDS,
        help="请求超时秒数（默认：%(default)s）",
    )
    parser.add_argument(
        "--user-agent",
        default=DEFAULT_USER_AGENT,
        help="自定义 User-Agent（默认：Chrome/Windows）",
    )
    return parser.parse_args(argv)


def main(argv: list[str]) -> int:
    args = _parse_args(argv)
    if args.timeout_seconds < 5:
        err_console.print("[red]错误：--timeout-seconds 不能小于 5[/red]")
        return ExitCodes.ERROR
    if args.retries < 1:
        err_console.print("[red]错误：--retries 不能小于 1[/red]")
        return ExitCodes.ERROR

    config = load_config(config_file=Path(args.config_file).expanduser())
    outcome = run_checkin(
        config,
        retries=args.retries,
        timeout_seconds=args.timeout_seconds,
        user_agent=args.user_agent,
    )
    return ExitCodes.OK if outcome.success else ExitCodes.ERROR


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
