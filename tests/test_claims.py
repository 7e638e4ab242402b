from datetime import timedelta

from app.models.base import utcnow
from app.storage.policy_store import PolicyStore
from conftest import HOLDER, policy_payload


def _claim(policy_id="POL-1", **overrides):
    payload = {
        "policyId": policy_id,
        "amount": 45000,
        "description": "Potential default event detected, under investigation",
    }
    payload.update(overrides)
    return payload


def _create_policy(client, policy_id="POL-1", **overrides):
    r = client.post("/api/v1/policies", json=policy_payload(id=policy_id, **overrides))
    assert r.status_code == 201


def test_submit_claim_with_evidence_document(client, db, ipfs):
    _create_policy(client)
    evidence = {"report": "valuation-drop.pdf", "dropPercent": 38}

    r = client.post("/api/v1/claims", json=_claim(id="CLM-1", evidence=evidence))
    assert r.status_code == 201
    body = r.json()
    assert body == {"success": True, "claimId": "CLM-1", "evidenceHash": body["evidenceHash"]}
    assert body["evidenceHash"] in ipfs.pinned

    assert client.get("/api/v1/claims/CLM-1/evidence").json() == evidence

    claim = client.get("/api/v1/claims/CLM-1").json()
    assert claim["status"] == "pending"
    assert claim["policyId"] == "POL-1"

    assert PolicyStore(db).get("POL-1").status == "claimed"
    assert client.get(f"/api/v1/users/{HOLDER}").json()["claims"] == ["CLM-1"]


def test_evidence_reference_is_kept_without_ipfs(no_ipfs_client):
    _create_policy(no_ipfs_client)
    r = no_ipfs_client.post("/api/v1/claims", json=_claim(evidence="ipfs://QmExisting"))
    assert r.status_code == 201
    assert r.json()["evidenceHash"] == "ipfs://QmExisting"


def test_evidence_document_needs_ipfs(no_ipfs_client):
    _create_policy(no_ipfs_client)
    r = no_ipfs_client.post("/api/v1/claims", json=_claim(evidence={"photo": "crack.jpg"}))
    assert r.status_code == 503
    assert r.json()["error_code"] == "NOT_CONFIGURED"
    assert no_ipfs_client.get("/api/v1/claims").json() == []


def test_claim_against_unknown_policy(client):
    r = client.post("/api/v1/claims", json=_claim(policy_id="missing"))
    assert r.status_code == 404
    assert r.json()["error_code"] == "POLICY_NOT_FOUND"


def test_claim_against_lapsed_policy(client):
    start = utcnow() - timedelta(days=30)
    _create_policy(client, startDate=start.isoformat(), endDate=(start + timedelta(days=10)).isoformat())
    r = client.post("/api/v1/claims", json=_claim())
    assert r.status_code == 400
    assert r.json()["error_code"] == "CLAIM_VALIDATION_ERROR"


def test_duplicate_claim_id(client):
    _create_policy(client)
    assert client.post("/api/v1/claims", json=_claim(id="CLM-1")).status_code == 201
    r = client.post("/api/v1/claims", json=_claim(id="CLM-1"))
    assert r.status_code == 409


def test_invalid_amount(client):
    _create_policy(client)
    r = client.post("/api/v1/claims", json=_claim(amount=0))
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid value for field: amount"


def test_approve_claim(client):
    _create_policy(client)
    client.post("/api/v1/claims", json=_claim(id="CLM-1"))

    r = client.post("/api/v1/claims/CLM-1/review", json={"approved": True, "processedBy": HOLDER})
    assert r.status_code == 200
    claim = r.json()
    assert claim["status"] == "approved"
    assert claim["processedBy"] == HOLDER
    assert claim["processedAt"] is not None
    assert claim["rejectionReason"] is None


def test_reject_claim_requires_reason(client):
    _create_policy(client)
    client.post("/api/v1/claims", json=_claim(id="CLM-1"))

    r = client.post("/api/v1/claims/CLM-1/review", json={"approved": False, "processedBy": HOLDER})
    assert r.status_code == 400

    r = client.post(
        "/api/v1/claims/CLM-1/review",
        json={"approved": False, "processedBy": HOLDER, "reason": "Insufficient evidence"}
    )
    assert r.status_code == 200
    assert r.json()["status"] == "rejected"
    assert r.json()["rejectionReason"] == "Insufficient evidence"


def test_reviewed_claim_cannot_be_reviewed_again(client):
    _create_policy(client)
    client.post("/api/v1/claims", json=_claim(id="CLM-1"))
    client.post("/api/v1/claims/CLM-1/review", json={"approved": True, "processedBy": HOLDER})

    r = client.post("/api/v1/claims/CLM-1/review", json={"approved": False, "processedBy": HOLDER, "reason": "x"})
    assert r.status_code == 409
    assert r.json()["details"] == {"current_status": "approved", "new_status": "rejected"}


def test_list_claims_by_policy_and_status(client):
    _create_policy(client, "POL-1")
    _create_policy(client, "POL-2")
    client.post("/api/v1/claims", json=_claim("POL-1", id="C1"))
    client.post("/api/v1/claims", json=_claim("POL-2", id="C2"))
    client.post("/api/v1/claims/C2/review", json={"approved": True, "processedBy": HOLDER})

    assert [c["id"] for c in client.get("/api/v1/claims", params={"policy_id": "POL-1"}).json()] == ["C1"]
    assert [c["id"] for c in client.get("/api/v1/claims", params={"status": "approved"}).json()] == ["C2"]
    assert len(client.get("/api/v1/claims").json()) == 2


def test_blank_evidence_is_treated_as_absent(client, db):
    _create_policy(client)
    r = client.post("/api/v1/claims", json=_claim(id="CLM-BLANK", evidence="  "))
    assert r.status_code == 201
    assert r.json()["evidenceHash"] is None
    assert client.get("/api/v1/claims/CLM-BLANK").json()["evidence"] is None
