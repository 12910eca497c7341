class CalculatorError(ValueError):
    """Base class for input problems reported back to the user as-is."""

    pass


class InvalidPrincipalError(CalculatorError):
    pass


class InvalidRateError(CalculatorError):
    pass


class InvalidDateFormatError(CalculatorError):
    pass


class OrderingError(CalculatorError):
    """Raised when the end date comes before the start date."""

    pass


class AmountOverflowError(CalculatorError):
    """Raised when the accrued amount grows past what a float can hold."""

    pass
