"""
Tests for the advisory API endpoints.

Tests FastAPI routes end to end against a fresh in-memory database.
Validates request validation, response schemas, and error mapping.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.application.advisory.simulate_investment import SimulateInvestmentUseCase
from app.infrastructure.advisory.catalog_repository import ProductRepositoryAdapter
from app.infrastructure.advisory.client_repository import ClientRepositoryAdapter
from app.interfaces.advisory.dependencies import get_simulate_investment_use_case
from app.main import app

D = Decimal

client = TestClient(app)


@pytest.fixture(autouse=True)
def database(api_engine):
    """Give every test its own seeded database and no leftover overrides."""
    yield api_engine
    app.dependency_overrides.clear()


def _register(client_id: int = 10, profile_id: int = 1):
    return client.post(
        "/api/v1/risk-profiles/clients",
        json={"client_id": client_id, "profile_id": profile_id},
    )


class TestHealthEndpoint:
    """Tests for GET /api/v1/health."""

    def test_health(self) -> None:
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["database"] == "ok"


class TestProductEndpoints:
    """Tests for GET /api/v1/products."""

    def test_lists_catalog(self) -> None:
        response = client.get("/api/v1/products")
        assert response.status_code == 200
        body = response.json()
        assert [p["id"] for p in body] == [1, 2, 3, 4]
        assert body[0]["risk_tier"] == "Low"
        assert D(body[0]["bands"][0]["annual_rate"]) == D("12.37445")

    def test_recommended_for_profile(self) -> None:
        response = client.get("/api/v1/products/recommended/2")
        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [1, 2, 4]

    def test_recommended_for_unknown_profile(self) -> None:
        response = client.get("/api/v1/products/recommended/9")
        assert response.status_code == 404
        assert response.json()["error"] == "Risk profile not found"

    def test_recommended_rejects_bad_id(self) -> None:
        response = client.get("/api/v1/products/recommended/0")
        assert response.status_code == 422
        assert response.json()["error"] == "Invalid input"


class TestClientProfileEndpoints:
    """Tests for /api/v1/risk-profiles/clients."""

    def test_register_and_get(self) -> None:
        response = _register()
        assert response.status_code == 201
        assert D(response.json()["max_risk"]) == D("1.5")

        fetched = client.get("/api/v1/risk-profiles/clients/10")
        assert fetched.status_code == 200
        assert fetched.json()["profile_name"] == "Conservative"

        listed = client.get("/api/v1/risk-profiles/clients")
        assert [c["client_id"] for c in listed.json()] == [10]

    def test_register_twice_conflicts(self) -> None:
        _register()
        response = _register(profile_id=2)
        assert response.status_code == 409

    def test_change_profile_keeps_ceiling(self) -> None:
        _register()
        response = client.put(
            "/api/v1/risk-profiles/clients/10", json={"profile_id": 3}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["profile_name"] == "Aggressive"
        assert D(body["profile_max_risk"]) == D("5.0")
        assert D(body["max_risk"]) == D("1.5")

    def test_unknown_client(self) -> None:
        response = client.get("/api/v1/risk-profiles/clients/42")
        assert response.status_code == 404
        assert response.json()["error"] == "Client not found"


class TestInvestmentEndpoints:
    """Tests for /api/v1/investments."""

    def test_record_and_read_back(self) -> None:
        _register()
        response = client.post(
            "/api/v1/investments",
            json={"client_id": 10, "product_id": 3, "amount": "1000"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["investment"]["product_category"] == "Fund"
        assert D(body["investment"]["yield_rate"]) == D("18")

        second = client.post(
            "/api/v1/investments",
            json={"client_id": 10, "product_id": 3, "amount": "1000"},
        ).json()
        assert D(second["previous_max_risk"]) == D("1.5")
        assert D(second["new_max_risk"]) == D("1.6")

        history = client.get("/api/v1/investments/10")
        assert [i["id"] for i in history.json()] == [1, 2]

        single = client.get("/api/v1/investments/10/2")
        assert single.status_code == 200
        assert single.json()["id"] == 2

    def test_missing_investment(self) -> None:
        _register()
        response = client.get("/api/v1/investments/10/5")
        assert response.status_code == 404

    def test_unknown_product(self) -> None:
        _register()
        response = client.post(
            "/api/v1/investments",
            json={"client_id": 10, "product_id": 99, "amount": "100"},
        )
        assert response.status_code == 404
        assert response.json()["error"] == "Product not found"

    def test_non_positive_amount_rejected(self) -> None:
        response = client.post(
            "/api/v1/investments",
            json={"client_id": 10, "product_id": 1, "amount": "-5"},
        )
        assert response.status_code == 422

    def test_sub_cent_amount_rejected(self) -> None:
        """Amounts must fit the stored two decimal places."""
        _register()
        response = client.post(
            "/api/v1/investments",
            json={"client_id": 10, "product_id": 1, "amount": "1000.005"},
        )
        assert response.status_code == 422
        assert client.get("/api/v1/investments/10").json() == []


class TestSimulationEndpoints:
    """Tests for /api/v1/simulations."""

    def test_simulate_by_product(self) -> None:
        _register()
        response = client.post(
            "/api/v1/simulations/product",
            json={"client_id": 10, "amount": "1000", "term_months": 12, "product_id": 1},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["validated_product"]["name"] == "CDB Caixa 2026"
        assert D(body["validated_product"]["annual_rate"]) == D("12.37")
        assert D(body["projection"]["final_value"]) == D("1124.15")
        assert D(body["projection"]["effective_yield"]) == D("12.42")
        assert body["audit_recorded"] is True

    def test_simulate_by_category_and_report(self) -> None:
        _register()
        for _ in range(2):
            response = client.post(
                "/api/v1/simulations",
                json={
                    "client_id": 10,
                    "amount": "1000",
                    "term_months": 12,
                    "product_category": "cdb",
                },
            )
            assert response.status_code == 200

        listed = client.get("/api/v1/simulations").json()
        assert [s["product_name"] for s in listed] == ["CDB Caixa 2026"] * 2

        daily = client.get("/api/v1/simulations/by-product-day").json()
        assert daily[0]["simulation_count"] == 2
        assert D(daily[0]["average_final_value"]) == D("1124.15")

    def test_amount_outside_bands(self) -> None:
        _register()
        response = client.post(
            "/api/v1/simulations/product",
            json={"client_id": 10, "amount": "100", "term_months": 12, "product_id": 2},
        )
        assert response.status_code == 404
        assert response.json()["error"] == "No applicable rate"

    def test_unknown_category(self) -> None:
        _register()
        response = client.post(
            "/api/v1/simulations",
            json={
                "client_id": 10,
                "amount": "100",
                "term_months": 12,
                "product_category": "crypto",
            },
        )
        assert response.status_code == 404

    def test_zero_term_rejected(self) -> None:
        response = client.post(
            "/api/v1/simulations/product",
            json={"client_id": 10, "amount": "100", "term_months": 0, "product_id": 1},
        )
        assert response.status_code == 422

    def test_audit_failure_still_returns_result(
        self, database, failing_simulation_repo
    ) -> None:
        """The projection is returned even when the audit row is lost."""
        _register()
        app.dependency_overrides[get_simulate_investment_use_case] = lambda: (
            SimulateInvestmentUseCase(
                client_repo=ClientRepositoryAdapter(database),
                product_repo=ProductRepositoryAdapter(database),
                simulation_repo=failing_simulation_repo,
            )
        )
        response = client.post(
            "/api/v1/simulations/product",
            json={"client_id": 10, "amount": "1000", "term_months": 12, "product_id": 1},
        )
        assert response.status_code == 200
        assert response.json()["audit_recorded"] is False
        assert client.get("/api/v1/simulations").json() == []


class TestSecurityHeaders:
    """Tests for security headers on responses."""

    def test_security_headers_present(self) -> None:
        """All security headers must be present on every response."""
        response = client.get("/api/v1/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Cache-Control"] == "no-store"

    def test_oversized_body_rejected(self) -> None:
        response = client.post(
            "/api/v1/investments",
            content=b"x" * 1_048_577,
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 413


class TestRateLimiting:
    """Tests for rate limiting behavior."""

    def test_rate_limit_returns_429(self) -> None:
        """Simulations beyond the heavy limit are rejected."""
        _register()
        payload = {
            "client_id": 10,
            "amount": "1000",
            "term_months": 12,
            "product_id": 1,
        }
        statuses = [
            client.post("/api/v1/simulations/product", json=payload).status_code
            for _ in range(11)
        ]
        assert statuses[:10] == [200] * 10
        assert statuses[10] == 429
