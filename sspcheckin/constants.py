from __future__ import annotations

ENV_DOMAIN = "DOMAIN"
ENV_USER = "USER"
ENV_PASS = "PASS"
ENV_PUSHPLUS_TOKEN = "PUSHPLUS_TOKEN"
ENV_PUSHPLUS_TOPIC = "PUSHPLUS_TOPIC"

DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_RETRIES = 3
RETRY_BACKOFF_SECONDS = 2.0
CHECKIN_DELAY_RANGE_SECONDS = (1.0, 5.0)
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"

LOGIN_PATH = "/auth/login"
CHECKIN_PATH = "/user/checkin"
LOGIN_SUCCESS_RET = 1

PUSHPLUS_URL = "https://www.pushplus.plus/send"
PUSHPLUS_TEMPLATE = "html"
PUSHPLUS_SUCCESS_CODE = 200
REPORT_TITLE = "每日签到报告"
