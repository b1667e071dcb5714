"""Shared fixtures: a fixed clock and a stub price source."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.estimator.exceptions import PriceUnavailable
from src.estimator.fare_service import TrainTicketEstimator
from src.estimator.schemas import Passenger, TripDetails, TripRequest

NOW = datetime(2025, 6, 2, 9, 0, 0)


class StubPriceResolver:
    """Returns a fixed price (or raises) and records every lookup."""

    def __init__(self, price=100, error: Exception | None = None) -> None:
        self.price = price
        self.error = error
        self.calls: list[tuple[str, str, datetime]] = []

    def get_base_price(self, origin: str, destination: str, when: datetime):
        self.calls.append((origin, destination, when))
        if self.error is not None:
            raise self.error
        return self.price


def make_trip(
    *passengers: Passenger,
    days: float = 10,
    from_city: str = "Paris",
    to_city: str = "Lyon",
) -> TripRequest:
    return TripRequest(
        details=TripDetails(
            from_city=from_city, to_city=to_city, when=NOW + timedelta(days=days)
        ),
        passengers=list(passengers),
    )


@pytest.fixture
def resolver() -> StubPriceResolver:
    return StubPriceResolver(price=100)


@pytest.fixture
def estimator(resolver: StubPriceResolver) -> TrainTicketEstimator:
    return TrainTicketEstimator(resolver, clock=lambda: NOW)


@pytest.fixture
def unavailable_estimator() -> TrainTicketEstimator:
    return TrainTicketEstimator(
        StubPriceResolver(error=PriceUnavailable()), clock=lambda: NOW
    )
