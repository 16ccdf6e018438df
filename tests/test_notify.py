from __future__ import annotations

import json
from urllib.error import URLError

from conftest import reply
from sspcheckin.config import CheckinConfig
from sspcheckin.constants import PUSHPLUS_URL
from sspcheckin.notify import build_report, send_pushplus


def test_no_token_is_a_noop(server):
    assert send_pushplus("", "title", "content") is False
    assert server.requests == []


def test_payload_without_topic(server):
    server.add(PUSHPLUS_URL, reply(200, {"code": 200, "msg": "请求成功"}))

    assert send_pushplus("tok", "每日签到报告", "状态: ok") is True

    req = server.requests[0]
    assert req.get_method() == "POST"
    assert json.loads(req.data) == {
        "token": "tok",
        "title": "每日签到报告",
        "content": "状态: ok",
        "template": "html",
    }


def test_payload_with_topic(server):
    server.add(PUSHPLUS_URL, reply(200, {"code": 200}))

    send_pushplus("tok", "t", "c", topic="team")

    assert json.loads(server.requests[0].data)["topic"] == "team"


def test_network_failure_is_swallowed(server):
    server.add(PUSHPLUS_URL, URLError("dns failure"))

    assert send_pushplus("tok", "t", "c") is False
    assert len(server.requests) == 1


def test_server_error_is_not_retried(server):
    server.add(PUSHPLUS_URL, reply(500, "oops"))

    assert send_pushplus("tok", "t", "c") is False
    assert len(server.requests) == 1


def test_rejected_token_is_reported_as_failure(server, capsys):
    server.add(PUSHPLUS_URL, reply(200, {"code": 903, "msg": "无效的用户token"}))

    assert send_pushplus("bad", "t", "c") is False
    assert "无效的用户token" in capsys.readouterr().err


def test_non_json_reply_is_swallowed(server):
    server.add(PUSHPLUS_URL, reply(200, "<html>maintenance</html>"))

    assert send_pushplus("tok", "t", "c") is False


def test_report_template():
    config = CheckinConfig(domain="panel.example.com", user="me@example.com")
    assert build_report(config, "🎉 ok") == "账号: me@example.com<br>域名: panel.example.com<br>状态: 🎉 ok"
