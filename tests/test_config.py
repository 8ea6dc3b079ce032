"""Tests for environment-driven settings."""

from __future__ import annotations

from backend.config import Settings


def test_defaults(monkeypatch):
    for key in ("REQUEST_TIMEOUT", "MAX_REDIRECTS", "API_PORT"):
        monkeypatch.delenv(key, raising=False)
    s = Settings()
    assert s.request_timeout == 15.0
    assert s.max_redirects == 5
    assert s.api_port == 3001


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("REQUEST_TIMEOUT", "4.5")
    monkeypatch.setenv("MAX_REDIRECTS", "2")
    monkeypatch.setenv("API_PORT", "9000")
    s = Settings()
    assert s.request_timeout == 4.5
    assert s.max_redirects == 2
    assert s.api_port == 9000
