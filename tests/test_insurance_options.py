from conftest import option_payload


def test_create_and_get_option(client):
    r = client.post("/api/v1/insurance-options", json=option_payload())
    assert r.status_code == 201
    created = r.json()
    assert created["id"] == "REAL-ESTATE-001"
    assert created["premiumRate"] == 2.5
    assert "createdAt" in created

    r = client.get("/api/v1/insurance-options/REAL-ESTATE-001")
    assert r.status_code == 200
    assert r.json()["name"] == "Real Estate Project 001"
    assert len(client.get("/api/v1/insurance-options").json()) == 1


def test_missing_field(client):
    payload = option_payload()
    del payload["premiumRate"]
    r = client.post("/api/v1/insurance-options", json=payload)
    assert r.status_code == 400
    assert r.json()["error"] == "Missing required field: premiumRate"


def test_duplicate_id(client):
    client.post("/api/v1/insurance-options", json=option_payload())
    r = client.post("/api/v1/insurance-options", json=option_payload(name="Other"))
    assert r.status_code == 409
    assert r.json()["error"] == "Insurance option with this ID already exists"


def test_unknown_option(client):
    assert client.get("/api/v1/insurance-options/nope").status_code == 404
    r = client.post("/api/v1/insurance-options/nope/quote", json={"coveragePercent": 50})
    assert r.status_code == 404


def test_quote(client):
    client.post("/api/v1/insurance-options", json=option_payload())
    r = client.post(
        "/api/v1/insurance-options/REAL-ESTATE-001/quote",
        json={"coveragePercent": 75, "durationMonths": 12}
    )
    assert r.status_code == 200
    assert r.json() == {
        "optionId": "REAL-ESTATE-001",
        "coveragePercent": 75.0,
        "durationMonths": 12,
        "coveredValue": 75000.0,
        "monthlyPremium": 156.25,
        "totalPremium": 1875.0,
        "premiumRateBps": 250,
    }


def test_quote_out_of_range(client):
    client.post("/api/v1/insurance-options", json=option_payload())
    r = client.post("/api/v1/insurance-options/REAL-ESTATE-001/quote", json={"coveragePercent": 120})
    assert r.status_code == 400
    assert r.json()["details"] == {"field": "coveragePercent"}
