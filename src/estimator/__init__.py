"""
Ticket Estimation Module

This module prices train trips for groups of passengers. It includes:

- Trip validation (cities, travel date, passenger ages)
- Base price lookup against the external price API
- Age bracket pricing with date-based surcharges and discounts
- Special fares for young children and TrainStroke card holders
- Family, couple and half-couple discounts

Key Components:
- fare_service.py: The pricing pipeline (TrainTicketEstimator)
- validation.py: Trip and passenger validation
- price_client.py: HTTP client for the base price API
- router.py: FastAPI endpoints for estimates
- schemas.py: Pydantic models for trips, passengers and estimates
"""

from .router import router
from .fare_service import TrainTicketEstimator
from .validation import TripValidator
from .price_client import BasePriceResolver, TrainPriceApiClient
from .exceptions import EstimationError, InvalidInput, PriceUnavailable
from .schemas import (
    DiscountCard, TripDetails, Passenger, TripRequest,
    PassengerFare, FareEstimate, EstimateValidationError
)

__all__ = [
    "router",
    "TrainTicketEstimator",
    "TripValidator",
    "BasePriceResolver",
    "TrainPriceApiClient",
    "EstimationError",
    "InvalidInput",
    "PriceUnavailable",
    "DiscountCard",
    "TripDetails",
    "Passenger",
    "TripRequest",
    "PassengerFare",
    "FareEstimate",
    "EstimateValidationError"
]
