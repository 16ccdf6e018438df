from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from rich.markup import escape

from sspcheckin.console import err_console
from sspcheckin.constants import (
    ENV_DOMAIN,
    ENV_PASS,
    ENV_PUSHPLUS_TOKEN,
    ENV_PUSHPLUS_TOPIC,
    ENV_USER,
)

# config.json key -> environment variable
_FILE_KEYS = {
    "domain": ENV_DOMAIN,
    "user": ENV_USER,
    "pass": ENV_PASS,
    "pushplus_token": ENV_PUSHPLUS_TOKEN,
    "pushplus_topic": ENV_PUSHPLUS_TOPIC,
}


@dataclass(frozen=True)
class CheckinConfig:
    domain: str = ""
    user: str = ""
    password: str = ""
    pushplus_token: str = ""
    pushplus_topic: str = ""

    def missing_fields(self) -> list[str]:
        missing: list[str] = []
        if not self.domain:
            missing.append(ENV_DOMAIN)
        if not self.user:
            missing.append(ENV_USER)
        if not self.password:
            missing.append(ENV_PASS)
        return missing

    @property
    def base_url(self) -> str:
        domain = self.domain.strip()
        if not domain.lower().startswith(("http://", "https://")):
            domain = f"https://{domain}"
        return domain.rstrip("/")


def _read_config_file(config_file: Path) -> dict[str, str]:
    if not config_file.exists():
        return {}

    try:
        loaded = json.loads(config_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"配置文件 JSON 格式错误：{exc}") from exc

    if not isinstance(loaded, dict):
        raise ValueError("配置文件格式错误：根节点必须是对象")

    result: dict[str, str] = {}
    for key, env_name in _FILE_KEYS.items():
        value = loaded.get(key)
        if isinstance(value, str) and value.strip():
            result[env_name] = value.strip()
    return result


def load_config(environ: Mapping[str, str] | None = None, config_file: Path | None = None) -> CheckinConfig:
    """Resolve settings once at start-up.

    Environment variables win over ``config_file`` field by field. A broken
    config file is reported and ignored so the run can still report the
    resulting configuration failure through the notifier.
    """
    env = os.environ if environ is None else environ

    from_file: dict[str, str] = {}
    if config_file is not None:
        try:
            from_file = _read_config_file(config_file)
        except (ValueError, OSError) as exc:
            err_console.print(f"[yellow]警告：已忽略配置文件 {escape(str(config_file))}：{escape(str(exc))}[/yellow]")

    def pick(env_name: str) -> str:
        value = (env.get(env_name) or "").strip()
        return value or from_file.get(env_name, "")

    return CheckinConfig(
        domain=pick(ENV_DOMAIN),
        user=pick(ENV_USER),
        password=pick(ENV_PASS),
        pushplus_token=pick(ENV_PUSHPLUS_TOKEN),
        pushplus_topic=pick(ENV_PUSHPLUS_TOPIC),
    )
