class EstimationError(Exception):
    """Base class for every failure that aborts an estimate"""


class InvalidInput(EstimationError):
    """The trip request cannot be priced as given"""

    START_CITY = "Start city is invalid"
    DESTINATION_CITY = "Destination city is invalid"
    DATE = "Date is invalid"
    AGE = "Age is invalid"

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class PriceUnavailable(EstimationError):
    """No usable base price could be obtained for the trip"""

    def __init__(self, message: str = "Base price is unavailable"):
        super().__init__(message)
        self.message = message
