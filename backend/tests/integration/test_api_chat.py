"""Integration tests for the chat endpoint."""

from services.response_formatter import DISCLAIMER


class TestChat:
    def test_stock_question(self, client):
        response = client.post("/api/chat", json={"message": "What is the share price of TCS?"})

        assert response.status_code == 200
        data = response.json()
        assert data["intent"] == "stock_lookup"
        assert data["payload"]["kind"] == "stock_lookup"
        assert data["payload"]["stocks"][0]["symbol"] == "TCS"
        assert data["payload"]["stocks"][0]["price_source"] == "mock"
        assert data["formatted"].startswith("📈 **Stock Insights**")
        assert data["formatted"].endswith(f"_{DISCLAIMER}_")
        assert data["disclaimer"] == DISCLAIMER

    def test_user_profile_personalises(self, client):
        response = client.post(
            "/api/chat",
            json={
                "message": "How should I allocate my portfolio?",
                "user_profile": {"age": 25, "risk_profile": "aggressive"},
            },
        )

        data = response.json()
        assert data["intent"] == "portfolio_advice"
        assert data["payload"]["recommended_allocation"]["equity"] == 80

    def test_general_fallback(self, client):
        data = client.post("/api/chat", json={"message": "Hello there"}).json()

        assert data["intent"] == "general"
        assert data["payload"]["capabilities"]

    def test_blank_message(self, client):
        response = client.post("/api/chat", json={"message": "   "})

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "message"

    def test_missing_message(self, client):
        assert client.post("/api/chat", json={}).status_code == 422
