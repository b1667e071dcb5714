import logging
import math
from typing import Callable, List, Optional, Set, Tuple
from datetime import datetime
from decimal import Decimal, InvalidOperation
from src.estimator.exceptions import PriceUnavailable
from src.estimator.price_client import BasePriceResolver, PRICE_UNAVAILABLE_SENTINEL
from src.estimator.schemas import (
    DiscountCard, FareEstimate, Passenger, PassengerFare, TripRequest
)
from src.estimator.validation import TripValidator, align_to_clock

logger = logging.getLogger(__name__)

FAMILY_RATE = Decimal('0.7')
CHILD_RATE = Decimal('0.6')
SENIOR_RATE = Decimal('0.8')
ADULT_RATE = Decimal('1.2')
SENIOR_CARD_REDUCTION = Decimal('0.2')

LAST_MINUTE_HOURS = 6
SURCHARGE_DAYS = 5
EARLY_BOOKING_DAYS = 30
TAPER_PIVOT_DAYS = 20
TAPER_RATE = Decimal('0.02')
DATE_DISCOUNT_RATE = Decimal('0.2')

CHILD_SPECIAL_PRICE = Decimal('9')
TRAIN_STROKE_PRICE = Decimal('1')

COUPLE_DISCOUNT_RATE = Decimal('0.2')
HALF_COUPLE_DISCOUNT_RATE = Decimal('0.1')

class TrainTicketEstimator:
    """Computes the price of a train trip for a group of passengers"""

    def __init__(
        self,
        price_resolver: BasePriceResolver,
        clock: Callable[[], datetime] = datetime.now,
        currency: str = "EUR"
    ):
        self.price_resolver = price_resolver
        self.clock = clock
        self.currency = currency
        self.validator = TripValidator()

    def estimate(self, trip: TripRequest) -> Decimal:
        """Return the total price of the trip"""
        return self.estimate_with_breakdown(trip).total

    def estimate_with_breakdown(self, trip: TripRequest) -> FareEstimate:
        """Price the trip and keep each passenger's contribution"""
        now = self.clock()
        self.validator.validate_trip_details(trip, now)

        passengers = trip.passengers
        if not passengers:
            return FareEstimate(total=Decimal('0'), currency=self.currency)

        base_price = self._resolve_base_price(trip)
        when = align_to_clock(trip.details.when, now)
        family_names = self.get_family_discount_last_names(passengers)

        breakdown = []
        total_price = Decimal('0')

        for index, passenger in enumerate(passengers):
            self.validator.validate_passenger(passenger)
            fare = self._price_passenger(index, passenger, base_price, when, now, family_names)
            breakdown.append(fare)
            total_price += fare.total

        group_discount, discount_amount = self._select_group_discount(passengers, base_price)
        total_price = self.apply_group_discounts(passengers, total_price, base_price)

        logger.debug(
            "Estimated %s -> %s for %d passengers: base=%s family=%s total=%s",
            trip.details.from_city, trip.details.to_city, len(passengers),
            base_price, sorted(family_names), total_price
        )

        return FareEstimate(
            total=total_price,
            base_price=base_price,
            passengers=breakdown,
            family_names=sorted(family_names),
            group_discount=group_discount,
            group_discount_amount=discount_amount,
            currency=self.currency
        )

    def _resolve_base_price(self, trip: TripRequest) -> Decimal:
        details = trip.details
        price = self.price_resolver.get_base_price(details.from_city, details.to_city, details.when)

        if isinstance(price, bool) or price is None:
            raise PriceUnavailable(f"Malformed base price {price!r}")
        try:
            base_price = Decimal(str(price))
        except InvalidOperation:
            raise PriceUnavailable(f"Malformed base price {price!r}")

        if not base_price.is_finite() or base_price == PRICE_UNAVAILABLE_SENTINEL or base_price < 0:
            raise PriceUnavailable()
        return base_price

    def _price_passenger(
        self,
        index: int,
        passenger: Passenger,
        base_price: Decimal,
        when: datetime,
        now: datetime,
        family_names: Set[str]
    ) -> PassengerFare:
        """Price one passenger; the family discount is checked before every other rule"""

        if passenger.last_name and passenger.last_name in family_names:
            return PassengerFare(passenger_index=index, rule="family", total=base_price * FAMILY_RATE)

        # Newborns travel free
        if passenger.age < 1:
            return PassengerFare(passenger_index=index, rule="infant", total=Decimal('0'))

        bracket_price = self.get_base_passenger_price(passenger, base_price)
        price = self.apply_date_adjustments(when, now, bracket_price, base_price)
        final_price = self.apply_special_cases(passenger, price)

        if passenger.age < 4:
            rule = "child_special"
        elif passenger.has_card(DiscountCard.TRAIN_STROKE):
            rule = "train_stroke"
        else:
            rule = "standard"

        return PassengerFare(
            passenger_index=index,
            rule=rule,
            bracket_price=bracket_price,
            date_adjustment=price - bracket_price,
            total=final_price
        )

    def get_family_discount_last_names(self, passengers: List[Passenger]) -> Set[str]:
        """Family names shared by several passengers, one of them holding the Family card"""
        family_names = set()

        for passenger in passengers:
            if passenger.last_name and passenger.has_card(DiscountCard.FAMILY):
                matching = [other for other in passengers if other.last_name == passenger.last_name]
                if len(matching) > 1:
                    family_names.add(passenger.last_name)

        return family_names

    def get_base_passenger_price(self, passenger: Passenger, base_price: Decimal) -> Decimal:
        """Age bracket price"""
        if passenger.age <= 17:
            return base_price * CHILD_RATE

        if passenger.age >= 70:
            price = base_price * SENIOR_RATE
            if passenger.has_card(DiscountCard.SENIOR):
                price -= base_price * SENIOR_CARD_REDUCTION
            return price

        return base_price * ADULT_RATE

    def apply_date_adjustments(
        self,
        when: datetime,
        now: datetime,
        price: Decimal,
        base_price: Decimal
    ) -> Decimal:
        """Adjust price by how far ahead the trip is booked"""
        diff_seconds = (when - now).total_seconds()
        diff_hours = diff_seconds / 3600
        diff_days = math.ceil(diff_seconds / 86400)

        # Last-minute discount wins over the day buckets
        if diff_hours <= LAST_MINUTE_HOURS:
            return price - base_price * DATE_DISCOUNT_RATE

        if diff_days < SURCHARGE_DAYS:
            return price + base_price

        if diff_days < EARLY_BOOKING_DAYS:
            return price + (TAPER_PIVOT_DAYS - diff_days) * TAPER_RATE * base_price

        return price - base_price * DATE_DISCOUNT_RATE

    def apply_special_cases(self, passenger: Passenger, price: Decimal) -> Decimal:
        """Fixed prices that replace everything computed so far"""
        if passenger.age < 4:
            return CHILD_SPECIAL_PRICE

        if passenger.has_card(DiscountCard.TRAIN_STROKE):
            return TRAIN_STROKE_PRICE

        return price

    def apply_group_discounts(
        self,
        passengers: List[Passenger],
        total: Decimal,
        base_price: Decimal
    ) -> Decimal:
        """Apply the couple or half-couple reduction to the summed total"""
        _, amount = self._select_group_discount(passengers, base_price)
        # Discounts never take the total below zero
        return max(total - amount, Decimal('0'))

    def _select_group_discount(
        self,
        passengers: List[Passenger],
        base_price: Decimal
    ) -> Tuple[Optional[str], Decimal]:
        # Runs on the full passenger list, family-discounted passengers included
        is_minor_in_group = any(p.age < 18 for p in passengers)

        if len(passengers) == 2:
            has_couple = any(p.has_card(DiscountCard.COUPLE) for p in passengers)
            if has_couple and not is_minor_in_group:
                return "couple", base_price * COUPLE_DISCOUNT_RATE * 2

        if len(passengers) == 1:
            passenger = passengers[0]
            if passenger.has_card(DiscountCard.HALF_COUPLE) and passenger.age >= 18:
                return "half_couple", base_price * HALF_COUPLE_DISCOUNT_RATE

        return None, Decimal('0')
