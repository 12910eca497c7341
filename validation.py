import math
import re

from bs_date import is_bs_date
from errors import InvalidDateFormatError, InvalidPrincipalError, InvalidRateError
from interest import calculate

INPUT_FIELDS = ("principal", "interestRate", "startDate", "endDate")

# Plain ASCII decimal, optional sign and exponent; no underscores or other scripts
NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def _parse_number(value):
    """Parse a user-entered number; None for blanks, garbage, NaN and inf."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        s = str(value).replace(",", "").strip()
        if not NUMBER_PATTERN.fullmatch(s):
            return None
        number = float(s)
    return number if math.isfinite(number) else None


def normalize_inputs(data):
    """Pick the four input fields out of a form/JSON mapping as strings."""
    inputs = {}
    for field in INPUT_FIELDS:
        value = data.get(field) if data else None
        inputs[field] = "" if value is None else str(value).strip()
    return inputs


def validate_inputs(inputs):
    """Check all inputs before any calculation runs.

    Returns (principal, rate, start_text, end_text). Date ordering is left
    to compute_duration.
    """
    principal = _parse_number(inputs.get("principal"))
    if principal is None or principal <= 0:
        raise InvalidPrincipalError("Please enter a valid principal amount greater than 0")

    rate = _parse_number(inputs.get("interestRate"))
    if rate is None or rate < 0:
        raise InvalidRateError("Please enter a valid interest rate (0 or greater)")

    start = inputs.get("startDate")
    end = inputs.get("endDate")
    if not is_bs_date(start) or not is_bs_date(end):
        raise InvalidDateFormatError("Please enter dates in YYYY-MM-DD format (BS calendar)")

    return principal, rate, start, end


def run_calculation(inputs):
    principal, rate, start, end = validate_inputs(inputs)
    return calculate(principal, rate, start, end)
