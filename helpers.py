import math
from datetime import datetime

from config import CURRENCY_SYMBOL


def round_half_away(value, places=2):
    """Round to `places` decimals, halves away from zero (x*100 -> nearest int -> /100)."""
    factor = 10 ** places
    # Past 2**52 a float has no fractional digits left to round
    if abs(value) * factor >= 2 ** 52:
        return value
    return math.copysign(math.floor(abs(value) * factor + 0.5), value) / factor


def plural(count, word):
    """'1 month', '3 months', '0 days'."""
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def group_indian(digits):
    """Insert en-IN separators into a string of digits: 20234624 -> 2,02,34,624."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_amount(amount, decimals=2):
    """Format with Indian digit grouping: 202346.24 -> '2,02,346.24'."""
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):.{decimals}f}"
    whole, _, frac = text.partition(".")
    grouped = group_indian(whole)
    return f"{sign}{grouped}.{frac}" if frac else f"{sign}{grouped}"


def format_npr(amount):
    return f"{CURRENCY_SYMBOL} {format_amount(amount)}"


def format_timestamp(ms):
    """Milliseconds since epoch -> 'YYYY-MM-DD HH:MM' in local time."""
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M")


def now_ms():
    return int(datetime.now().timestamp() * 1000)
