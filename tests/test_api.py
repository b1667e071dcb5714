"""Tests for the estimate endpoints."""

from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from src.estimator.dependencies import get_clock, get_estimator
from src.estimator.exceptions import PriceUnavailable
from src.estimator.fare_service import TrainTicketEstimator
from src.main import app
from tests.conftest import NOW, StubPriceResolver

TEN_DAYS_AHEAD = "2025-06-12T09:00:00"
YESTERDAY = "2025-06-01T09:00:00"


@pytest.fixture
def resolver() -> StubPriceResolver:
    return StubPriceResolver(price=100)


@pytest.fixture
def client(resolver):
    app.dependency_overrides[get_estimator] = lambda: TrainTicketEstimator(
        resolver, clock=lambda: NOW
    )
    app.dependency_overrides[get_clock] = lambda: (lambda: NOW)
    yield TestClient(app)
    app.dependency_overrides.clear()


def _trip(*passengers: dict, from_city: str = "Paris", when: str = TEN_DAYS_AHEAD) -> dict:
    return {
        "details": {"from_city": from_city, "to_city": "Lyon", "when": when},
        "passengers": list(passengers),
    }


def test_root_and_health(client) -> None:
    assert client.get("/").status_code == 200
    assert client.get("/health").json() == {"status": "healthy"}


class TestEstimateEndpoint:
    def test_single_adult(self, client) -> None:
        resp = client.post("/api/v1/estimates", json=_trip({"age": 25}))

        assert resp.status_code == 200
        data = resp.json()
        assert Decimal(data["total"]) == Decimal("140")
        assert data["passengers"][0]["rule"] == "standard"
        assert data["currency"] == "EUR"

    def test_family_and_cards(self, client) -> None:
        resp = client.post(
            "/api/v1/estimates",
            json=_trip(
                {"age": 40, "discounts": ["Family"], "last_name": "Dupont"},
                {"age": 12, "last_name": "Dupont"},
                {"age": 45, "last_name": "Durand"},
            ),
        )

        assert resp.status_code == 200
        data = resp.json()
        assert Decimal(data["total"]) == Decimal("280")
        assert data["family_names"] == ["Dupont"]

    def test_no_passengers(self, client, resolver) -> None:
        resp = client.post("/api/v1/estimates", json=_trip())

        assert resp.status_code == 200
        assert Decimal(resp.json()["total"]) == 0
        assert resolver.calls == []

    def test_invalid_city(self, client) -> None:
        resp = client.post("/api/v1/estimates", json=_trip({"age": 25}, from_city=" "))

        assert resp.status_code == 400
        assert resp.json()["detail"]["reason"] == "Start city is invalid"

    def test_past_date(self, client) -> None:
        resp = client.post("/api/v1/estimates", json=_trip({"age": 25}, when=YESTERDAY))

        assert resp.status_code == 400
        assert resp.json()["detail"]["reason"] == "Date is invalid"

    def test_negative_age(self, client) -> None:
        resp = client.post("/api/v1/estimates", json=_trip({"age": -4}))

        assert resp.status_code == 400
        assert resp.json()["detail"]["reason"] == "Age is invalid"

    def test_unknown_discount_card(self, client) -> None:
        resp = client.post(
            "/api/v1/estimates", json=_trip({"age": 25, "discounts": ["Platinum"]})
        )

        assert resp.status_code == 422

    def test_price_unavailable(self, client, resolver) -> None:
        resolver.error = PriceUnavailable()

        resp = client.post("/api/v1/estimates", json=_trip({"age": 25}))

        assert resp.status_code == 502


class TestValidateEndpoint:
    def test_valid_trip(self, client, resolver) -> None:
        resp = client.post("/api/v1/estimates/validate", json=_trip({"age": 25}))

        assert resp.json() == {"is_valid": True, "validation_errors": []}
        assert resolver.calls == []

    def test_reports_every_problem(self, client) -> None:
        resp = client.post(
            "/api/v1/estimates/validate",
            json=_trip({"age": 25}, {"age": -1}, from_city="", when=YESTERDAY),
        )

        data = resp.json()
        assert data["is_valid"] is False
        assert [e["error_code"] for e in data["validation_errors"]] == [
            "INVALID_START_CITY", "PAST_TRAVEL_DATE", "INVALID_AGE"
        ]
        assert data["validation_errors"][2]["field"] == "passengers.1.age"


def test_discount_cards(client) -> None:
    resp = client.get("/api/v1/estimates/discount-cards")

    assert resp.status_code == 200
    assert [item["card"] for item in resp.json()] == [
        "Senior", "TrainStroke", "Couple", "HalfCouple", "Family"
    ]
