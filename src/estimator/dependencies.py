from typing import Callable, Iterator
from datetime import datetime
from fastapi import Depends
from src.config import settings
from src.estimator.fare_service import TrainTicketEstimator
from src.estimator.price_client import BasePriceResolver, TrainPriceApiClient
from src.estimator.validation import TripValidator

def get_clock() -> Callable[[], datetime]:
    return datetime.now

def get_trip_validator() -> TripValidator:
    return TripValidator()

def get_price_resolver() -> Iterator[BasePriceResolver]:
    """Price API client scoped to one request"""
    client = TrainPriceApiClient(
        settings.PRICE_API_URL,
        timeout=settings.PRICE_API_TIMEOUT_SECONDS
    )
    try:
        yield client
    finally:
        client.close()

def get_estimator(
    price_resolver: BasePriceResolver = Depends(get_price_resolver),
    clock: Callable[[], datetime] = Depends(get_clock)
) -> TrainTicketEstimator:
    return TrainTicketEstimator(price_resolver, clock=clock, currency=settings.CURRENCY)
