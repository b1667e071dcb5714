from typing import List
from datetime import datetime
from src.estimator.exceptions import InvalidInput
from src.estimator.schemas import TripRequest, Passenger, EstimateValidationError

def align_to_clock(when: datetime, now: datetime) -> datetime:
    """Express a travel date in the clock's timezone"""
    if when.tzinfo and not now.tzinfo:
        return when.astimezone().replace(tzinfo=None)
    if now.tzinfo and not when.tzinfo:
        return when.replace(tzinfo=now.tzinfo)
    if when.tzinfo and now.tzinfo:
        return when.astimezone(now.tzinfo)
    return when

class TripValidator:
    """Validation of trip requests before and during pricing"""

    def validate_trip_details(self, trip: TripRequest, now: datetime) -> None:
        """Fail fast on the first invalid trip field"""
        details = trip.details

        if not details.from_city.strip():
            raise InvalidInput(InvalidInput.START_CITY)

        if not details.to_city.strip():
            raise InvalidInput(InvalidInput.DESTINATION_CITY)

        if self._is_before_today(details.when, now):
            raise InvalidInput(InvalidInput.DATE)

    def validate_passenger(self, passenger: Passenger) -> None:
        if passenger.age < 0:
            raise InvalidInput(InvalidInput.AGE)

    def validate_trip_request(
        self,
        trip: TripRequest,
        now: datetime
    ) -> List[EstimateValidationError]:
        """Collect every validation problem without pricing the trip"""
        errors = []
        details = trip.details

        if not details.from_city.strip():
            errors.append(EstimateValidationError(
                error_code="INVALID_START_CITY",
                error_message=InvalidInput.START_CITY,
                field="details.from_city"
            ))

        if not details.to_city.strip():
            errors.append(EstimateValidationError(
                error_code="INVALID_DESTINATION_CITY",
                error_message=InvalidInput.DESTINATION_CITY,
                field="details.to_city"
            ))

        if self._is_before_today(details.when, now):
            errors.append(EstimateValidationError(
                error_code="PAST_TRAVEL_DATE",
                error_message=InvalidInput.DATE,
                field="details.when"
            ))

        for index, passenger in enumerate(trip.passengers):
            if passenger.age < 0:
                errors.append(EstimateValidationError(
                    error_code="INVALID_AGE",
                    error_message=InvalidInput.AGE,
                    field=f"passengers.{index}.age"
                ))

        return errors

    def _is_before_today(self, when: datetime, now: datetime) -> bool:
        # Day granularity, time of day is ignored
        return align_to_clock(when, now).date() < now.date()
