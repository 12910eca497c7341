"""Compound interest the way Nepali lenders quote it.

A rate below MONTHLY_RATE_THRESHOLD (10) is read as a monthly percentage,
so 3 means 3% a month (36% a year). A rate of 10 or more is read as an
annual percentage, so 18 means 18% a year (1.5% a month). This mirrors how
rates are quoted locally and is intentionally kept as-is.

Interest compounds once per full BS year. Whatever is left over after the
full years (months and days) accrues simple interest on the compounded
principal, at the monthly rate for months and monthly/30 for days, and is
booked as one trailing ledger entry.
"""
import math
from collections import namedtuple

from bs_date import Duration, duration_between
from config import BS_DAYS_PER_MONTH, BS_MONTHS_PER_YEAR, MONTHLY_RATE_THRESHOLD
from errors import AmountOverflowError, InvalidPrincipalError, InvalidRateError
from helpers import plural, round_half_away


class LedgerEntry(namedtuple(
    "LedgerEntry", ["period", "starting_principal", "interest", "ending_amount", "details"]
)):
    __slots__ = ()

    def to_dict(self):
        return {
            "period": self.period,
            "startingPrincipal": self.starting_principal,
            "interest": self.interest,
            "endingAmount": self.ending_amount,
            "details": self.details,
        }

    @classmethod
    def from_dict(cls, d):
        return cls(
            period=str(d["period"]),
            starting_principal=float(d["startingPrincipal"]),
            interest=float(d["interest"]),
            ending_amount=float(d["endingAmount"]),
            details=str(d.get("details") or ""),
        )


class CalculationResult(namedtuple(
    "CalculationResult", ["final_amount", "total_interest", "duration", "breakdown"]
)):
    __slots__ = ()

    def to_dict(self):
        return {
            "finalAmount": self.final_amount,
            "totalInterest": self.total_interest,
            "timeDuration": self.duration.to_dict(),
            "breakdown": [entry.to_dict() for entry in self.breakdown],
        }

    @classmethod
    def from_dict(cls, d):
        td = d["timeDuration"]
        return cls(
            final_amount=float(d["finalAmount"]),
            total_interest=float(d["totalInterest"]),
            duration=Duration(int(td["years"]), int(td["months"]), int(td["days"])),
            breakdown=tuple(LedgerEntry.from_dict(e) for e in d["breakdown"]),
        )


def format_rate(rate):
    """Shortest round-tripping form without a trailing .0: 36.0 -> '36'."""
    text = repr(float(rate))
    return text[:-2] if text.endswith(".0") else text


def interpret_rate(rate):
    """Return (monthly_rate, annual_rate) in percent for a quoted rate."""
    if rate < MONTHLY_RATE_THRESHOLD:
        return rate, rate * BS_MONTHS_PER_YEAR
    return rate / BS_MONTHS_PER_YEAR, rate


def _partial_entry(principal, monthly_rate, months, days):
    monthly_amount = principal * monthly_rate / 100
    months_interest = monthly_amount * months
    daily_amount = monthly_amount / BS_DAYS_PER_MONTH
    days_interest = daily_amount * days
    interest = months_interest + days_interest

    label = []
    details = []
    if months > 0:
        label.append(plural(months, "month"))
        details.append(
            f"{months} months: {monthly_amount:.2f} × {months} = {months_interest:.2f}"
        )
    if days > 0:
        label.append(plural(days, "day"))
        details.append(
            f"{days} days: {daily_amount:.2f} × {days} = {days_interest:.2f}"
        )

    return LedgerEntry(
        period=" ".join(label),
        starting_principal=principal,
        interest=interest,
        ending_amount=principal + interest,
        details=", ".join(details),
    )


def _check_finite(amount):
    if not math.isfinite(amount):
        raise AmountOverflowError(
            "The amount grows too large to calculate; try a shorter period or a lower rate"
        )


def compute_interest(principal, rate, duration):
    """Accrue interest over `duration` and return a CalculationResult.

    Per-entry figures keep full float precision; only the final amount and
    total interest are rounded, so displayed rows can differ from the total
    by a cent.
    """
    if principal <= 0:
        raise InvalidPrincipalError("Principal must be greater than 0")
    if rate < 0:
        raise InvalidRateError("Interest rate cannot be negative")

    monthly_rate, annual_rate = interpret_rate(rate)
    breakdown = []
    current = principal

    for year in range(1, duration.years + 1):
        interest = current * annual_rate / 100
        breakdown.append(LedgerEntry(
            period=f"Year {year}",
            starting_principal=current,
            interest=interest,
            ending_amount=current + interest,
            details=f"{current:.2f} × {format_rate(annual_rate)}% = {interest:.2f}",
        ))
        current += interest
        _check_finite(current)

    if duration.months > 0 or duration.days > 0:
        entry = _partial_entry(current, monthly_rate, duration.months, duration.days)
        breakdown.append(entry)
        current = entry.ending_amount
        _check_finite(current)

    return CalculationResult(
        final_amount=round_half_away(current),
        total_interest=round_half_away(current - principal),
        duration=duration,
        breakdown=tuple(breakdown),
    )


def calculate(principal, rate, start_text, end_text):
    """Date strings in, CalculationResult out."""
    if principal <= 0:
        raise InvalidPrincipalError("Principal must be greater than 0")
    if rate < 0:
        raise InvalidRateError("Interest rate cannot be negative")
    return compute_interest(principal, rate, duration_between(start_text, end_text))
