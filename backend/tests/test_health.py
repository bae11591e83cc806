"""Tests for root, health and request-context behaviour."""

from unittest.mock import patch

from deckvault.middleware.request_context import _rate_buckets, check_rate_limit


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["name"] == "DeckVault API"


def test_health_with_search_disabled(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["db"] == "ok"
    assert body["search"] == "disabled"
    assert "uptime_seconds" in body


def test_request_id_is_propagated(client):
    resp = client.get("/", headers={"X-Request-ID": "abc123"})
    assert resp.headers["X-Request-ID"] == "abc123"
    assert resp.headers["X-Response-Time"].endswith("ms")


def test_malformed_request_id_is_replaced(client):
    resp = client.get("/", headers={"X-Request-ID": "two words"})
    assert resp.headers["X-Request-ID"] != "two words"
    assert len(resp.headers["X-Request-ID"]) == 16


def test_forwarded_clients_have_separate_buckets(client):
    with patch("deckvault.middleware.request_context.settings") as mock_settings:
        mock_settings.rate_limit_per_minute = 1
        first = client.get("/api/organizations/acme", headers={"X-Forwarded-For": "10.0.0.1, 10.0.0.9"})
        other = client.get("/api/organizations/acme", headers={"X-Forwarded-For": "10.0.0.2"})
        again = client.get("/api/organizations/acme", headers={"X-Forwarded-For": "10.0.0.1"})
    _rate_buckets.clear()
    assert first.status_code != 429
    assert other.status_code != 429
    assert again.status_code == 429


def test_rate_limited_request_gets_429(client):
    with patch("deckvault.middleware.request_context.settings") as mock_settings:
        mock_settings.rate_limit_per_minute = 1
        client.get("/api/organizations/acme")
        resp = client.get("/api/organizations/acme")
    _rate_buckets.clear()
    assert resp.status_code == 429
    assert resp.json()["code"] == "RATE_LIMITED"
    assert "Retry-After" in resp.headers


class TestCheckRateLimit:

    def test_allows_within_limit(self):
        allowed, retry = check_rate_limit({}, "client-a", max_per_minute=60, now=0.0)
        assert allowed is True
        assert retry == 0.0

    def test_denies_after_exhaustion_then_refills(self):
        bucket: dict = {}
        for _ in range(60):
            check_rate_limit(bucket, "client-a", max_per_minute=60, now=0.0)

        allowed, retry = check_rate_limit(bucket, "client-a", max_per_minute=60, now=0.0)
        assert allowed is False
        assert retry > 0

        allowed, _ = check_rate_limit(bucket, "client-a", max_per_minute=60, now=2.0)
        assert allowed is True

    def test_keys_are_independent(self):
        bucket: dict = {}
        for _ in range(60):
            check_rate_limit(bucket, "client-a", max_per_minute=60, now=0.0)
        allowed, _ = check_rate_limit(bucket, "client-b", max_per_minute=60, now=0.0)
        assert allowed is True

    def test_zero_limit_always_allows(self):
        allowed, _ = check_rate_limit({}, "any", max_per_minute=0, now=0.0)
        assert allowed is True
