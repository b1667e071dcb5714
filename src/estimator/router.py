from fastapi import APIRouter, Depends, HTTPException, status
from typing import Callable, List
from datetime import datetime

from src.estimator.dependencies import get_clock, get_estimator, get_trip_validator
from src.estimator.exceptions import InvalidInput, PriceUnavailable
from src.estimator.fare_service import TrainTicketEstimator
from src.estimator.validation import TripValidator
from src.estimator.schemas import (
    TripRequest, FareEstimate, EstimateValidationResponse, DiscountCard, DiscountCardInfo
)

router = APIRouter()

DISCOUNT_CARD_DESCRIPTIONS = {
    DiscountCard.SENIOR: "Passengers aged 70 or more pay 60% of the base price instead of 80%",
    DiscountCard.TRAIN_STROKE: "Flat fare of 1 for passengers aged 4 or more",
    DiscountCard.COUPLE: "20% of the base price off for each of two adult passengers travelling together",
    DiscountCard.HALF_COUPLE: "10% of the base price off for an adult travelling alone",
    DiscountCard.FAMILY: "70% of the base price for every passenger sharing the holder's family name",
}

@router.post("", response_model=FareEstimate)
def estimate_trip(
    request: TripRequest,
    estimator: TrainTicketEstimator = Depends(get_estimator)
):
    """Estimate the ticket price of a trip"""

    try:
        return estimator.estimate_with_breakdown(request)
    except InvalidInput as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": "Trip request validation failed",
                "reason": e.reason
            }
        )
    except PriceUnavailable as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=e.message
        )

@router.post("/validate", response_model=EstimateValidationResponse)
def validate_trip(
    request: TripRequest,
    validator: TripValidator = Depends(get_trip_validator),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    """Validate a trip request without looking up its price"""

    validation_errors = validator.validate_trip_request(request, clock())

    return EstimateValidationResponse(
        is_valid=len(validation_errors) == 0,
        validation_errors=validation_errors
    )

@router.get("/discount-cards", response_model=List[DiscountCardInfo])
def get_discount_cards():
    """List the discount cards and what each one grants"""
    return [
        DiscountCardInfo(card=card, description=DISCOUNT_CARD_DESCRIPTIONS[card])
        for card in DiscountCard
    ]
