"""
Tests for tenxer/infra/llm_health.py
"""
import requests

from tenxer.infra import llm_health
from tenxer.infra.llm_health import guidance_message, health_check


class _Resp:
    def __init__(self, status_code):
        self.status_code = status_code


def test_no_key_skips_request(monkeypatch):
    def _boom(*a, **kw):
        raise AssertionError("should not be called")
    monkeypatch.setattr(llm_health.requests, "get", _boom)
    assert health_check("http://x/v1", None).ok is False


def test_ok_endpoint(monkeypatch):
    seen = {}

    def _get(url, headers, timeout):
        seen["url"] = url
        seen["auth"] = headers["Authorization"]
        return _Resp(200)
    monkeypatch.setattr(llm_health.requests, "get", _get)
    hs = health_check("http://x/v1/", "k")
    assert hs.ok
    assert seen == {"url": "http://x/v1/models", "auth": "Bearer k"}


def test_network_error(monkeypatch):
    def _get(*a, **kw):
        raise requests.ConnectionError("refused")
    monkeypatch.setattr(llm_health.requests, "get", _get)
    hs = health_check("http://x/v1", "k")
    assert hs.ok is False
    assert "ConnectionError" in guidance_message("http://x/v1", hs)
