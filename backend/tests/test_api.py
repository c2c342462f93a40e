from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.api.v1.endpoints import market as market_endpoints
from app.main import app
from app.schemas.market import AssetClass
from app.services.data_ingestion.orchestrator import FallbackOrchestrator
from app.services.snapshot.service import MarketSnapshotService


@pytest.fixture
def client(monkeypatch, fake_adapter):
    registry = {
        AssetClass.CRYPTO: [fake_adapter("Binance (Real-time)", closes=[100.0 + i for i in range(80)])],
        AssetClass.FOREX: [fake_adapter("Twelve Data", succeed=False)],
    }
    service = MarketSnapshotService(orchestrator=FallbackOrchestrator(registry))
    monkeypatch.setattr(market_endpoints, "get_market_snapshot_service", lambda: service)
    return TestClient(app)


def test_market_data_returns_camel_case_snapshot(client) -> None:
    response = client.post("/api/v1/market/data", json={"symbol": "btcusd", "timeframe": "1H"})

    assert response.status_code == 200
    body = response.json()
    assert body["symbol"] == "BTCUSD"
    assert body["source"] == "Binance (Real-time)"
    assert body["historicalData"] == [100.0 + i for i in range(30, 80)]
    assert "changePercent" in body
    assert "bollingerBands" in body["indicators"]


def test_market_data_falls_back_to_demo_data(client) -> None:
    response = client.post(
        "/api/v1/market/data",
        json={"symbol": "EURUSD", "apiKeys": {"twelvedata": "key"}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "Demo Data"
    assert body["price"] == 1.085
    assert body["note"]


@pytest.mark.parametrize("payload", [{}, {"symbol": ""}, {"symbol": "   "}, {"timeframe": "1H"}])
def test_invalid_request_is_rejected(client, payload) -> None:
    response = client.post("/api/v1/market/data", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"


def test_classify_endpoint(client) -> None:
    response = client.get("/api/v1/market/classify/xauusd")

    assert response.json() == {"symbol": "XAUUSD", "assetClass": "forex"}


def test_providers_endpoint(client) -> None:
    body = client.get("/api/v1/market/providers").json()

    assert body["crypto"] == ["Binance (Real-time)"]
    assert body["stock"] == []


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.parametrize(
    "payload",
    [
        {"symbol": "AAPL", "apiKeys": None},
        {"symbol": "AAPL", "apiKeys": {"alphavantage": None}},
        {"symbol": "AAPL", "timeframe": None},
        {"symbol": "AAPL", "timeframe": "2H"},
    ],
)
def test_null_optional_fields_are_treated_as_absent(client, payload) -> None:
    response = client.post("/api/v1/market/data", json=payload)

    assert response.status_code == 200
    assert response.json()["symbol"] == "AAPL"
