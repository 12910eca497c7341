"""Bikram Sambat date handling on a fixed 30-day month / 12-month year model.

Real BS months run 29 to 32 days depending on the year; the calculator
deliberately ignores that and does plain borrowing subtraction instead.
"""
import re
from collections import namedtuple

from config import BS_DAYS_PER_MONTH, BS_MONTHS_PER_YEAR
from errors import InvalidDateFormatError, OrderingError
from helpers import plural

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


class BSDate(namedtuple("BSDate", ["year", "month", "day"])):
    __slots__ = ()

    def __str__(self):
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


class Duration(namedtuple("Duration", ["years", "months", "days"])):
    __slots__ = ()

    def label(self):
        """Long form, e.g. '2 years 3 months 4 days'."""
        return " ".join([
            plural(self.years, "year"),
            plural(self.months, "month"),
            plural(self.days, "day"),
        ])

    def short_label(self):
        return f"{self.years}y {self.months}m {self.days}d"

    def to_dict(self):
        return {"years": self.years, "months": self.months, "days": self.days}


def is_bs_date(text):
    return isinstance(text, str) and DATE_PATTERN.fullmatch(text) is not None


def parse_bs_date(text):
    """Parse 'YYYY-MM-DD' into a BSDate. Month and day ranges are not checked."""
    if not is_bs_date(text):
        raise InvalidDateFormatError("Please enter dates in YYYY-MM-DD format (BS calendar)")
    year, month, day = (int(part) for part in text.split("-"))
    return BSDate(year, month, day)


def compute_duration(start, end):
    """Elapsed (years, months, days) from start to end.

    Component-wise subtraction with borrowing: base 30 for days, base 12
    for months. Tuple comparison gives the (year, month, day) ordering.
    """
    if end < start:
        raise OrderingError("End date must be after start date")

    years = end.year - start.year
    months = end.month - start.month
    days = end.day - start.day

    if days < 0:
        months -= 1
        days += BS_DAYS_PER_MONTH

    if months < 0:
        years -= 1
        months += BS_MONTHS_PER_YEAR

    return Duration(years, months, days)


def duration_between(start_text, end_text):
    return compute_duration(parse_bs_date(start_text), parse_bs_date(end_text))
