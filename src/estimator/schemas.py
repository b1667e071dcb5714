from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, FrozenSet, Literal
from datetime import datetime
from decimal import Decimal
from enum import Enum

class DiscountCard(str, Enum):
    """Discount cards a passenger can hold"""
    SENIOR = "Senior"
    TRAIN_STROKE = "TrainStroke"
    COUPLE = "Couple"
    HALF_COUPLE = "HalfCouple"
    FAMILY = "Family"

# Trip request models
class TripDetails(BaseModel):
    """Route and travel date of a trip"""
    model_config = ConfigDict(frozen=True)

    from_city: str
    to_city: str
    when: datetime

class Passenger(BaseModel):
    """A single traveller; age may be fractional for infants"""
    model_config = ConfigDict(frozen=True)

    age: float
    discounts: FrozenSet[DiscountCard] = frozenset()
    last_name: Optional[str] = None

    def has_card(self, card: DiscountCard) -> bool:
        return card in self.discounts

class TripRequest(BaseModel):
    """Trip details plus the passengers travelling together"""
    model_config = ConfigDict(frozen=True)

    details: TripDetails
    passengers: List[Passenger] = Field(default_factory=list)

# Estimate models
PricingRule = Literal["family", "infant", "child_special", "train_stroke", "standard"]
GroupDiscount = Literal["couple", "half_couple"]

class PassengerFare(BaseModel):
    """Price contribution of one passenger"""
    passenger_index: int
    rule: PricingRule
    bracket_price: Decimal = Decimal('0')
    date_adjustment: Decimal = Decimal('0')
    total: Decimal

class FareEstimate(BaseModel):
    """Full estimate with per-passenger breakdown"""
    total: Decimal
    base_price: Optional[Decimal] = None
    passengers: List[PassengerFare] = Field(default_factory=list)
    family_names: List[str] = Field(default_factory=list)
    group_discount: Optional[GroupDiscount] = None
    group_discount_amount: Decimal = Decimal('0')
    currency: str = "EUR"

class EstimateValidationError(BaseModel):
    """Trip validation error details"""
    error_code: str
    error_message: str
    field: Optional[str] = None

class EstimateValidationResponse(BaseModel):
    """Result of a dry-run validation"""
    is_valid: bool
    validation_errors: List[EstimateValidationError]

class DiscountCardInfo(BaseModel):
    """Describes what a discount card does"""
    card: DiscountCard
    description: str
