"""
Tests for the banks and simulations API endpoints.
"""

import pytest

# Client fixture is provided by conftest.py

SIMULATION_PAYLOAD = {
    "property_value": 300000,
    "down_payment_percentage": 20,
    "term_months": 360,
    "apply_subsidy": False,
}


class TestHealth:
    """Test health endpoint."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestBanksAPI:
    """Test bank table endpoint."""

    def test_list_banks(self, client):
        response = client.get("/api/banks")
        assert response.status_code == 200
        data = response.json()
        assert [bank["name"] for bank in data["banks"]] == [
            "Caixa",
            "Bradesco",
            "Itaú",
            "Santander",
        ]
        assert data["banks"][0]["subsidy_eligible"] is True
        assert data["banks"][0]["monthly_rate"] < data["banks"][0]["annual_rate"]
        assert data["subsidy_amount"] == 30000


class TestSimulationAPI:
    """Test simulation endpoint."""

    def test_simulate(self, client):
        response = client.post("/api/simulations", json=SIMULATION_PAYLOAD)
        assert response.status_code == 200
        data = response.json()

        results = data["results"]
        assert len(results) == 8
        assert [(r["bank"], r["method"]) for r in results[:4]] == [
            ("Caixa", "SAC"),
            ("Caixa", "PRICE"),
            ("Bradesco", "SAC"),
            ("Bradesco", "PRICE"),
        ]
        for result in results:
            assert result["financed_amount"] == 240000
            assert result["total_paid"] - result["total_interest"] == pytest.approx(240000)

        assert data["best_option"]["bank"] == "Caixa"
        assert data["best_option"]["method"] == "SAC"

    def test_simulate_with_subsidy(self, client):
        payload = dict(SIMULATION_PAYLOAD, apply_subsidy=True)
        response = client.post("/api/simulations", json=payload)
        assert response.status_code == 200
        amounts = {r["bank"]: r["financed_amount"] for r in response.json()["results"]}
        assert amounts["Caixa"] == 210000
        assert amounts["Santander"] == 240000

    def test_simulate_defaults(self, client):
        response = client.post("/api/simulations", json={"property_value": 300000})
        assert response.status_code == 200
        assert len(response.json()["results"]) == 8

    def test_property_value_below_minimum(self, client):
        payload = dict(SIMULATION_PAYLOAD, property_value=49999)
        response = client.post("/api/simulations", json=payload)
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert [error["field"] for error in detail] == ["property_value"]
        assert detail[0]["value"] == 49999

    def test_multiple_invalid_fields(self, client):
        payload = dict(SIMULATION_PAYLOAD, down_payment_percentage=5, term_months=600)
        response = client.post("/api/simulations", json=payload)
        assert response.status_code == 422
        fields = [error["field"] for error in response.json()["detail"]]
        assert fields == ["down_payment_percentage", "term_months"]

    def test_missing_property_value(self, client):
        response = client.post("/api/simulations", json={"term_months": 360})
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert [error["field"] for error in detail] == ["property_value"]
        assert detail[0]["value"] is None
        assert set(detail[0]) == {"field", "message", "value"}

    def test_fractional_term_uses_field_error_shape(self, client):
        payload = dict(SIMULATION_PAYLOAD, term_months=360.5)
        response = client.post("/api/simulations", json=payload)
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert [error["field"] for error in detail] == ["term_months"]
        assert detail[0]["value"] == 360.5
        assert set(detail[0]) == {"field", "message", "value"}

    @pytest.mark.parametrize(
        "body",
        [
            '{"property_value": NaN}',
            '{"property_value": 1e400}',
            '{"property_value": 300000, "down_payment_percentage": Infinity}',
        ],
    )
    def test_non_finite_numbers_rejected(self, client, body):
        """Non-finite numbers are rejected with a JSON-safe 422."""
        response = client.post(
            "/api/simulations",
            content=body,
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert len(detail) == 1
        assert detail[0]["field"] in ("property_value", "down_payment_percentage")
        assert detail[0]["value"] is None


class TestScheduleAPI:
    """Test schedule endpoint."""

    def test_schedule(self, client):
        payload = dict(
            SIMULATION_PAYLOAD,
            term_months=12,
            bank="Caixa",
            method="PRICE",
            start_date="2025-01-01",
        )
        response = client.post("/api/simulations/schedule", json=payload)
        assert response.status_code == 200
        data = response.json()
        assert data["bank"] == "Caixa"
        assert data["method"] == "PRICE"
        assert len(data["schedule"]) == 12
        assert data["schedule"][0]["date"] == "2025-01-01"
        assert data["schedule"][-1]["date"] == "2025-12-01"
        assert data["schedule"][-1]["ending_balance"] == 0
        assert data["total_paid"] == pytest.approx(
            sum(row["payment"] for row in data["schedule"]), abs=0.01
        )
        assert data["total_paid"] - data["total_interest"] == pytest.approx(240000, abs=0.5)

    def test_unknown_bank(self, client):
        payload = dict(SIMULATION_PAYLOAD, bank="Nubank", method="SAC")
        response = client.post("/api/simulations/schedule", json=payload)
        assert response.status_code == 404
        assert "Nubank" in response.json()["detail"]

    def test_unknown_method(self, client):
        payload = dict(SIMULATION_PAYLOAD, bank="Caixa", method="GERMAN")
        response = client.post("/api/simulations/schedule", json=payload)
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert [error["field"] for error in detail] == ["method"]
        assert detail[0]["value"] == "GERMAN"
        assert set(detail[0]) == {"field", "message", "value"}

    def test_invalid_request(self, client):
        payload = dict(SIMULATION_PAYLOAD, term_months=6, bank="Caixa", method="SAC")
        response = client.post("/api/simulations/schedule", json=payload)
        assert response.status_code == 422
        assert response.json()["detail"][0]["field"] == "term_months"
