"""Tests for the /api/analyze endpoint.

The fetch step is patched at ``backend.scraper.analyzer.fetch_page`` so no
network calls are made; extraction runs for real against inline HTML.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from backend.api.app import create_app
from backend.scraper.errors import FetchError
from backend.scraper.models import FetchOutcome


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client():
    with TestClient(create_app(), raise_server_exceptions=True) as c:
        yield c


def _outcome(html: str, final_url: str = "https://videos.example/watch/1") -> FetchOutcome:
    return FetchOutcome(final_url=final_url, html=html, status_code=200)


_STREAM_PAGE = """\
<html><head>
  <title>Clip</title>
  <meta property="og:video:secure_url" content="https://cdn.example/clip.mp4">
</head><body></body></html>
"""


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestAnalyzeSuccess:
    def test_returns_stream_envelope(self, client):
        with patch("backend.scraper.analyzer.fetch_page", return_value=_outcome(_STREAM_PAGE)) as mock_fetch:
            resp = client.post("/api/analyze", json={"url": "https://videos.example/watch/1"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        data = body["data"]
        assert data["url"] == "https://cdn.example/clip.mp4"
        assert data["contentType"] == "video/mp4"
        assert data["title"] == "Clip"
        assert data["description"] == ""
        assert data["siteName"] == "videos.example"
        assert "poster" not in data
        assert "error" not in body
        mock_fetch.assert_called_once_with("https://videos.example/watch/1", None)

    def test_hls_content_type(self, client):
        html = '<html><body><video src="https://cdn.example/live.m3u8"></video></body></html>'
        with patch("backend.scraper.analyzer.fetch_page", return_value=_outcome(html)):
            resp = client.post("/api/analyze", json={"url": "https://videos.example/watch/1"})

        assert resp.status_code == 200
        assert resp.json()["data"]["contentType"] == "application/x-mpegURL"


class TestAnalyzeInputErrors:
    def test_missing_url(self, client):
        resp = client.post("/api/analyze", json={})
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "URL is required"}

    def test_null_url(self, client):
        resp = client.post("/api/analyze", json={"url": None})
        assert resp.status_code == 400
        assert resp.json()["error"] == "URL is required"

    def test_missing_body(self, client):
        resp = client.post("/api/analyze")
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "URL is required"}

    def test_non_string_url_is_invalid_not_missing(self, client):
        resp = client.post("/api/analyze", json={"url": 123})
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Invalid URL: 123"}

    def test_malformed_url(self, client):
        resp = client.post("/api/analyze", json={"url": "videos.example/watch"})
        assert resp.status_code == 400
        assert resp.json()["success"] is False
        assert resp.json()["error"].startswith("Invalid URL")


class TestAnalyzeFailures:
    def test_no_stream_is_404_naming_host(self, client):
        html = "<html><head><title>Text only</title></head></html>"
        with patch("backend.scraper.analyzer.fetch_page", return_value=_outcome(html)):
            resp = client.post("/api/analyze", json={"url": "https://short.example/1"})

        assert resp.status_code == 404
        body = resp.json()
        assert body["success"] is False
        assert "videos.example" in body["error"]

    def test_upstream_status_is_mirrored(self, client):
        err = FetchError("Request failed with status code 403", upstream_status=403)
        with patch("backend.scraper.analyzer.fetch_page", side_effect=err):
            resp = client.post("/api/analyze", json={"url": "https://videos.example/1"})

        assert resp.status_code == 403
        assert resp.json() == {
            "success": False,
            "error": "Failed to analyze URL: Request failed with status code 403",
        }

    def test_network_failure_without_status_is_500(self, client):
        with patch("backend.scraper.analyzer.fetch_page", side_effect=FetchError("timeout of 15s exceeded")):
            resp = client.post("/api/analyze", json={"url": "https://videos.example/1"})

        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to analyze URL: timeout of 15s exceeded"

    def test_unexpected_error_is_enveloped(self, client):
        with patch("backend.scraper.analyzer.fetch_page", return_value=_outcome(_STREAM_PAGE)), \
             patch("backend.scraper.analyzer.extract_stream", side_effect=RuntimeError("boom")):
            resp = client.post("/api/analyze", json={"url": "https://videos.example/1"})

        assert resp.status_code == 500
        assert resp.json() == {"success": False, "error": "Failed to analyze URL: boom"}


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_cors_allows_any_origin(self, client):
        resp = client.options(
            "/api/analyze",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] in ("*", "http://localhost:5173")
