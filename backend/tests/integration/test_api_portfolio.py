"""Integration tests for portfolio API endpoints."""

from decimal import Decimal

import pytest


def _create(client, **overrides):
    body = {"user_id": "user-1", "name": "Long term"}
    body.update(overrides)
    response = client.post("/api/portfolio", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def _add(client, portfolio_id, **overrides):
    body = {"kind": "stock", "symbol": "A", "quantity": "10", "average_cost": "100", "current_price": "150"}
    body.update(overrides)
    return client.post(f"/api/portfolio/{portfolio_id}/investments", json=body)


@pytest.fixture
def worked_example(client):
    """A: 10 @ 100 now 150; B: 5 @ 200 now 180."""
    portfolio = _create(client)
    _add(client, portfolio["id"], sector="IT")
    _add(client, portfolio["id"], symbol="B", quantity="5", average_cost="200", current_price="180", sector="Banking")
    return portfolio["id"]


class TestCreatePortfolio:
    def test_create_defaults(self, client):
        """New portfolios start empty with the risk profile's allocation."""
        data = _create(client)

        assert data["user_id"] == "user-1"
        assert data["risk_profile"] == "moderate"
        assert {k: Decimal(v) for k, v in data["target_allocation"].items()} == {
            "equity": 60, "debt": 30, "gold": 5, "cash": 5,
        }
        assert Decimal(data["total_invested"]) == 0
        assert data["investments"] == []

    def test_create_with_risk_profile(self, client):
        data = _create(client, risk_profile="Aggressive")

        assert data["risk_profile"] == "aggressive"
        assert Decimal(data["target_allocation"]["equity"]) == 80

    def test_unknown_risk_profile(self, client):
        response = client.post("/api/portfolio", json={"user_id": "u", "risk_profile": "yolo"})

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "risk_profile"

    def test_allocation_must_sum_to_100(self, client):
        response = client.post(
            "/api/portfolio",
            json={"user_id": "u", "target_allocation": {"equity": 50, "debt": 20}},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "target_allocation"

    def test_blank_user_id(self, client):
        response = client.post("/api/portfolio", json={"user_id": "  "})
        assert response.status_code == 400
        assert response.json()["detail"] == {"field": "user_id", "message": "is required"}


class TestReadUpdateDelete:
    def test_get_and_list(self, client):
        first = _create(client)
        second = _create(client, name="Second")
        _create(client, user_id="someone-else")

        assert client.get(f"/api/portfolio/{first['id']}").json()["name"] == "Long term"
        listed = client.get("/api/portfolio/user/user-1").json()
        assert [p["id"] for p in listed] == [first["id"], second["id"]]

    def test_get_unknown(self, client):
        response = client.get("/api/portfolio/missing")

        assert response.status_code == 404
        assert "missing" in response.json()["detail"]

    def test_patch_risk_profile_keeps_allocation(self, client):
        portfolio = _create(client)

        response = client.patch(f"/api/portfolio/{portfolio['id']}", json={"risk_profile": "conservative"})

        assert response.status_code == 200
        data = response.json()
        assert data["risk_profile"] == "conservative"
        assert Decimal(data["target_allocation"]["equity"]) == 60

    def test_delete(self, client):
        portfolio = _create(client)

        assert client.delete(f"/api/portfolio/{portfolio['id']}").status_code == 204
        assert client.get(f"/api/portfolio/{portfolio['id']}").status_code == 404
        assert client.delete(f"/api/portfolio/{portfolio['id']}").status_code == 404


class TestInvestments:
    """Tests for adding, updating and removing investments."""

    def test_aggregates_recomputed(self, client, worked_example):
        data = client.get(f"/api/portfolio/{worked_example}").json()

        assert Decimal(data["total_invested"]) == Decimal("2000")
        assert Decimal(data["current_value"]) == Decimal("2400")
        assert Decimal(data["total_returns"]) == Decimal("400")
        assert Decimal(data["return_percentage"]) == Decimal("20")
        assert len(data["investments"]) == 2

    def test_add_returns_investment(self, client):
        portfolio = _create(client)

        response = _add(client, portfolio["id"], symbol="tcs", current_price=None)

        assert response.status_code == 201
        data = response.json()
        assert data["symbol"] == "TCS"
        assert data["name"] == "TCS"
        assert data["portfolio_id"] == portfolio["id"]
        assert Decimal(data["current_price"]) == Decimal("100")

    def test_negative_quantity(self, client):
        portfolio = _create(client)

        response = _add(client, portfolio["id"], quantity="-1")

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "quantity"

    def test_add_to_unknown_portfolio(self, client):
        assert _add(client, "missing").status_code == 404

    def test_update_investment(self, client, worked_example):
        investment = client.get(f"/api/portfolio/{worked_example}").json()["investments"][0]

        response = client.put(
            f"/api/portfolio/{worked_example}/investments/{investment['id']}",
            json={"current_price": "200"},
        )

        assert response.status_code == 200
        assert Decimal(response.json()["current_value"]) == Decimal("2000")
        portfolio = client.get(f"/api/portfolio/{worked_example}").json()
        assert Decimal(portfolio["current_value"]) == Decimal("2900")

    def test_remove_investment(self, client, worked_example):
        investment = client.get(f"/api/portfolio/{worked_example}").json()["investments"][1]

        response = client.delete(f"/api/portfolio/{worked_example}/investments/{investment['id']}")

        assert response.status_code == 200
        data = response.json()
        assert len(data["investments"]) == 1
        assert Decimal(data["total_invested"]) == Decimal("1000")

    def test_remove_unknown_investment(self, client, worked_example):
        response = client.delete(f"/api/portfolio/{worked_example}/investments/nope")
        assert response.status_code == 404


class TestRefresh:
    def test_partial_failure(self, client, worked_example):
        """B's lookup fails: A is repriced, B keeps its last price."""
        response = client.post(f"/api/portfolio/{worked_example}/refresh")

        assert response.status_code == 200
        data = response.json()
        assert data["unavailable_symbols"] == ["B"]
        assert len(data["updated_investment_ids"]) == 1
        prices = {inv["symbol"]: Decimal(inv["current_price"]) for inv in data["portfolio"]["investments"]}
        assert prices == {"A": Decimal("130"), "B": Decimal("180")}
        assert Decimal(data["portfolio"]["current_value"]) == Decimal("2200")

    def test_unknown_portfolio(self, client):
        assert client.post("/api/portfolio/missing/refresh").status_code == 404


class TestAnalysis:
    def test_analysis(self, client, worked_example):
        response = client.get(f"/api/portfolio/{worked_example}/analysis")

        assert response.status_code == 200
        data = response.json()
        assert data["portfolio_id"] == worked_example
        assert data["basic_metrics"]["investment_count"] == 2
        assert data["basic_metrics"]["best_performer"]["name"] == "A"
        assert set(data["asset_allocation"]) == {"equity", "debt", "gold", "cash", "other"}
        assert Decimal(data["asset_allocation"]["equity"]["percentage"]) == Decimal("100")
        assert set(data["sector_allocation"]) == {"IT", "Banking"}
        assert 0 <= data["diversification_score"] <= 100
        assert isinstance(data["recommendations"], list)

    def test_empty_portfolio(self, client):
        portfolio = _create(client)

        data = client.get(f"/api/portfolio/{portfolio['id']}/analysis").json()

        assert data["basic_metrics"]["investment_count"] == 0
        assert data["basic_metrics"]["best_performer"] is None
