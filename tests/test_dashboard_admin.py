from datetime import timedelta

from app.core.dependencies import get_ipfs_resolver
from app.core.exceptions import NotConfiguredError
from app.main import app
from app.models.base import utcnow
from app.services.seed import seed_collection
from conftest import policy_payload


def test_dashboard_stats_on_seed_data(client, db):
    for name in ("insurance-options", "policies", "claims", "tokens"):
        seed_collection(db, name)

    stats = client.get("/api/v1/dashboard/stats").json()
    assert stats["overview"] == {
        "totalPolicies": 3,
        "activePolicies": 3,
        "totalClaims": 3,
        "pendingClaims": 1,
        "insuranceOptions": 3,
        "tokens": 7,
        "policyHolders": 1,
    }
    assert stats["claimsByStatus"] == {"approved": 1, "pending": 1, "rejected": 1}
    assert stats["financials"]["activeCoverage"] == 337500.0
    assert stats["financials"]["totalPremiums"] == 8750.0
    assert stats["financials"]["totalApproved"] == 60000.0
    assert stats["financials"]["approvalRate"] == 50.0
    assert stats["averageProcessingDays"] == 5.0


def test_dashboard_stats_empty(client):
    stats = client.get("/api/v1/dashboard/stats").json()
    assert stats["overview"]["totalPolicies"] == 0
    assert stats["claimsByStatus"] == {}
    assert stats["financials"]["averageClaim"] == 0


def test_recent_claims_and_policies(client, db):
    seed_collection(db, "policies")
    seed_collection(db, "claims")

    claims = client.get("/api/v1/dashboard/recent-claims", params={"limit": 2}).json()
    assert [c["id"] for c in claims] == ["CLM-002", "CLM-001"]

    policies = client.get("/api/v1/dashboard/recent-policies").json()
    assert [p["id"] for p in policies] == ["POL-003", "POL-001", "POL-002"]


def test_policy_expiry_alerts(client):
    start = utcnow() - timedelta(days=300)
    client.post("/api/v1/policies", json=policy_payload(
        id="SOON",
        startDate=start.isoformat(),
        endDate=(utcnow() + timedelta(days=10)).isoformat()
    ))
    client.post("/api/v1/policies", json=policy_payload(id="LATER"))

    alerts = client.get("/api/v1/dashboard/policy-expiry-alerts", params={"days_ahead": 30}).json()
    assert alerts["daysAhead"] == 30
    assert alerts["totalExpiring"] == 1
    assert alerts["expiringPolicies"][0]["id"] == "SOON"


def test_admin_health(client):
    health = client.get("/api/v1/admin/health").json()
    assert health["status"] == "healthy"
    assert health["ipfs"] == {"enabled": True, "provider": "memory"}
    assert set(health["chain"]["contracts"]) == {"InsuranceCore", "ClaimProcessor", "TokenRWAFactory", "MockBSDToken"}


def test_database_status(client, mongo, monkeypatch, db):
    seed_collection(db, "tokens")
    monkeypatch.setattr(mongo, "ping", lambda: True)

    status = client.get("/api/v1/admin/database/status").json()
    assert status["connected"] is True
    assert status["collections"]["tokens"] == 7
    assert status["collections"]["claims"] == 0

    monkeypatch.setattr(mongo, "ping", lambda: False)
    assert client.get("/api/v1/admin/database/status").json()["connected"] is False


def test_root(client):
    body = client.get("/").json()
    assert body["status"] == "running"
    assert body["endpoints"]["tokens"] == "/api/v1/tokens"


def _pinata_without_jwt():
    raise NotConfiguredError("IPFS pinning service", "PINATA_JWT")


def test_misconfigured_ipfs_only_fails_ipfs_operations(client):
    app.dependency_overrides[get_ipfs_resolver] = lambda: _pinata_without_jwt

    assert client.get("/api/v1/policies").status_code == 200
    assert client.get("/api/v1/claims").status_code == 200

    r = client.post("/api/v1/policies", json=policy_payload())
    assert r.status_code == 503
    assert r.json()["error_code"] == "NOT_CONFIGURED"

    health = client.get("/api/v1/admin/health").json()
    assert health["ipfs"]["enabled"] is False
    assert "PINATA_JWT" in health["ipfs"]["error"]
