from __future__ import annotations

import requests
from fastapi.testclient import TestClient

from whogotpwned.database.memory import InMemoryLookupStore
from whogotpwned.errors import UpstreamFailure
from whogotpwned.main import create_app
from whogotpwned.scrapers.breach_check import LeakCheckLookupStore


def test_check_breached_email(client):
    r = client.post("/api/check-email", json={"email": "test@example.com"})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["found"] is True
    assert body["totalBreaches"] == 2
    assert body["note"] == "Found in 2 data breaches"
    assert body["source"] == "breach-database"
    adobe = body["breaches"][0]
    assert adobe["name"] == "Adobe Breach 2013"
    assert adobe["domain"] == "adobe.com"
    assert adobe["breachDate"] == "2013-10-04"
    assert adobe["severity"] == "high"
    assert adobe["compromisedData"] == ["email", "password", "username"]


def test_check_is_case_insensitive(client):
    upper = client.post("/api/check-email", json={"email": "  HACKED@gmail.com "}).json()
    lower = client.post("/api/check-email", json={"email": "hacked@gmail.com"}).json()
    assert upper == lower
    assert upper["note"] == "Found in 1 data breach"


def test_check_safe_email(client):
    body = client.post("/api/check-email", json={"email": "safe@example.com"}).json()
    assert body["found"] is False
    assert body["breaches"] == []
    assert body["totalBreaches"] == 0


def test_missing_email_is_400(client):
    r = client.post("/api/check-email", json={})
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Email is required"}


def test_missing_body_is_400(client):
    r = client.post("/api/check-email")
    assert r.status_code == 400
    assert r.json()["error"] == "Email is required"


def test_malformed_email_is_400(client):
    r = client.post("/api/check-email", json={"email": "not-an-email"})
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Please enter a valid email address"}


def test_wrong_body_type_is_400(client):
    r = client.post("/api/check-email", json={"email": ["a@b.com"]})
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_upstream_failure_is_500_with_message():
    class DownStore(InMemoryLookupStore):
        backend = "leakcheck"

        def find_breaches(self, email):
            raise UpstreamFailure("Too many requests")

    with TestClient(create_app(store=DownStore())) as c:
        r = c.post("/api/check-email", json={"email": "user@example.com"})
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Too many requests"}


def test_malformed_upstream_body_is_500_with_message():
    class GarbledSession:
        def get(self, url, params=None, headers=None, timeout=None):
            response = requests.Response()
            response.status_code = 200
            response._content = b'{"found": true, "breaches": 3}'
            return response

        def close(self):
            pass

    store = LeakCheckLookupStore(url="https://leakcheck.test/api/public", session=GarbledSession())
    with TestClient(create_app(store=store)) as c:
        r = c.post("/api/check-email", json={"email": "user@example.com"})
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Invalid response from breach lookup service"}


def test_unexpected_store_fault_is_generic_500():
    class BrokenStore(InMemoryLookupStore):
        def find_breaches(self, email):
            raise RuntimeError("secret connection string leaked")

        def all_records(self):
            raise RuntimeError("disk on fire")

    with TestClient(create_app(store=BrokenStore())) as c:
        check = c.post("/api/check-email", json={"email": "user@example.com"})
        stats = c.get("/api/stats")
    assert check.status_code == 500
    assert check.json() == {"success": False, "error": "Internal server error"}
    assert stats.status_code == 500
    assert stats.json() == {"success": False, "error": "Failed to fetch statistics"}


def test_stats(client):
    r = client.get("/api/stats")
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["totalEmails"] == 11
    assert data["breachPercentage"] == "63.64"
    assert data["recentChecks"] is None
    assert data["severityCounts"] == {"high": 4, "medium": 2, "low": 2}
    assert data["topDomains"][0] == {"_id": "yahoo.com", "count": 2}
    assert len(data["topDomains"]) <= 5


def test_health(client):
    body = client.get("/api/health").json()
    assert body["status"] == "OK"
    assert body["database"] == "memory"
    assert body["stats"] == {"emailChecks": 11, "breachRecords": 8, "breachedEmails": 7, "safeEmails": 4}


def test_debug_dump(client):
    body = client.get("/api/debug/breaches").json()
    assert body["success"] is True
    assert len(body["data"]["test@example.com"]) == 2
    assert "safe@example.com" in body["safeEmails"]


def test_debug_routes_can_be_disabled(sample_store):
    with TestClient(create_app(store=sample_store, enable_debug=False)) as c:
        assert c.get("/api/debug/breaches").status_code == 404
        assert "GET /api/debug/breaches" not in c.get("/").json()["endpoints"]


def test_root_lists_test_emails(client):
    body = client.get("/").json()
    assert "test@example.com" in body["testEmails"]["breached"]
    assert "safe@example.com" in body["testEmails"]["safe"]


def test_cors_preflight_for_dev_frontend(client):
    r = client.options(
        "/api/check-email",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "http://localhost:5173"
