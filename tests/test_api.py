"""
Tests for the calculation API endpoints.
"""

import pytest

from tvmcalc.calculations import float_close

# Client fixture is provided by conftest.py


class TestHealth:
    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestFormulaEndpoints:
    """Test the per-formula endpoints."""

    def test_fv(self, client):
        response = client.post(
            "/api/calculate/fv",
            json={"rate": 0.075, "nper": 20, "pmt": -2000.0, "pv": 0.0, "when": "begin"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["formula"] == "fv"
        assert data["solved"] is True
        assert float_close(data["result"], 93105.064874)

    def test_pmt(self, client):
        response = client.post(
            "/api/calculate/pmt",
            json={"rate": 0.08 / 12, "nper": 60, "pv": 15000.0},
        )
        assert response.status_code == 200
        assert float_close(response.json()["result"], -304.145914)

    def test_nper_infinite(self, client):
        response = client.post(
            "/api/calculate/nper",
            json={"rate": 0.0, "pmt": 0.0, "pv": 0.0, "fv": 100000.0},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["result"] == "inf"
        assert data["solved"] is True

    def test_ipmt_no_solution(self, client):
        response = client.post(
            "/api/calculate/ipmt",
            json={"rate": 0.1 / 12, "per": 0, "nper": 24, "pv": 2000.0},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["result"] is None
        assert data["solved"] is False

    def test_ppmt(self, client):
        response = client.post(
            "/api/calculate/ppmt",
            json={"rate": 0.1 / 12, "per": 1, "nper": 60, "pv": 55000.0},
        )
        assert float_close(response.json()["result"], -710.254125786425)

    def test_rate(self, client):
        response = client.post(
            "/api/calculate/rate",
            json={"nper": 10, "pmt": 0.0, "pv": -3500.0, "fv": 10000.0},
        )
        assert float_close(response.json()["result"], 0.11069085371426901)

    def test_npv(self, client):
        response = client.post(
            "/api/calculate/npv",
            json={"rate": 0.05, "values": [-15000.0, 1500.0, 2500.0, 3500.0, 4500.0, 6000.0]},
        )
        assert float_close(response.json()["result"], 122.89485495093959)

    def test_irr(self, client):
        response = client.post(
            "/api/calculate/irr",
            json={"values": [-150000.0, 15000.0, 25000.0, 35000.0, 45000.0, 60000.0]},
        )
        assert float_close(response.json()["result"], 0.052432888859413884)

    def test_irr_same_sign(self, client):
        response = client.post("/api/calculate/irr", json={"values": [1.0, 2.0]})
        assert response.status_code == 200
        assert response.json()["solved"] is False

    def test_mirr(self, client):
        response = client.post(
            "/api/calculate/mirr",
            json={
                "values": [100.0, 200.0, -50.0, 300.0, -200.0],
                "finance_rate": 0.05,
                "reinvest_rate": 0.06,
            },
        )
        assert float_close(response.json()["result"], 0.3428233878421769)

    @pytest.mark.parametrize(
        "body",
        [
            {"nper": 20, "pmt": -2000.0, "pv": 0.0},
            {"rate": 0.075, "nper": "twenty", "pmt": -2000.0, "pv": 0.0},
            {"rate": 0.075, "nper": 20, "pmt": -2000.0, "pv": 0.0, "when": "later"},
        ],
    )
    def test_invalid_body_rejected(self, client, body):
        response = client.post("/api/calculate/fv", json=body)
        assert response.status_code == 422


class TestEvaluateEndpoint:
    """Test the generic evaluation endpoint."""

    def test_evaluate(self, client):
        response = client.post(
            "/api/calculate/evaluate/pv",
            json={"rate": 0.07, "nper": 20, "pmt": 12000.0},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["formula"] == "pv"
        assert float_close(data["result"], -127128.17094619398)

    def test_unknown_formula(self, client):
        response = client.post("/api/calculate/evaluate/xnpv", json={})
        assert response.status_code == 400

    def test_missing_parameter(self, client):
        response = client.post("/api/calculate/evaluate/pv", json={"rate": 0.07})
        assert response.status_code == 400
        assert "nper" in response.json()["detail"]


class TestAmortizationEndpoint:
    def test_schedule(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={"rate": 0.06 / 12, "nper": 12, "pv": 10000.0},
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["schedule"]) == 12
        assert float_close(data["total_principal"], -10000.0)

    def test_schedule_keeps_non_finite_values(self, client):
        # (1 + rate)**nper overflows, so every payment is NaN rather than missing
        response = client.post(
            "/api/calculate/amortization",
            json={"rate": 1.0, "nper": 2000, "pv": 1000.0},
        )
        assert response.status_code == 200
        data = response.json()
        first = data["schedule"][0]
        assert first["payment"] == "nan"
        assert first["interest"] == "nan"
        assert first["principal"] == "nan"
        assert data["total_interest"] == "nan"
        assert data["total_principal"] == "nan"

    def test_when_alias(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={"rate": 0.06 / 12, "nper": 12, "pv": 10000.0, "when": "BEGIN"},
        )
        assert response.status_code == 200
        assert response.json()["schedule"][0]["interest"] == 0.0

    def test_unknown_field_rejected(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={"rate": 0.06 / 12, "nper": 12, "pv": 10000.0, "pmt": -100.0},
        )
        assert response.status_code == 422
