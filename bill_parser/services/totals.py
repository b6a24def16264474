"""
Total computation for bill line items.

Prices are kept as raw text while editing. sanitize_price is the numeric view
of that text: it never raises, anything unusable counts as zero.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Iterable

from ..models.bill import LineItem

_NOISE = re.compile(r"[^0-9.\-]+")
# Longest leading number, the way the browser's parseFloat reads it
_LEADING_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
_CENTS = Decimal("0.01")
ZERO_TOTAL = "0.00"


def sanitize_price(value) -> Decimal:
    """
    Convert a freeform price into a finite Decimal.

    Examples:
        "12.00"     -> Decimal("12.00")
        "Rs 12.00"  -> Decimal("12.00")
        "$1,234.50" -> Decimal("1234.50")
        "abc"       -> Decimal("0")
        "1.2.3"     -> Decimal("1.2")
    """
    text = "" if value is None else str(value)
    cleaned = _NOISE.sub("", text)

    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return Decimal("0")

    try:
        number = Decimal(match.group(0))
    except InvalidOperation:
        return Decimal("0")

    if not number.is_finite():
        return Decimal("0")
    return number


def _digits_needed(values: list[Decimal]) -> int:
    """Context precision that keeps sums of values exact (at least the default 28)"""
    integer_digits = max((max(v.adjusted() + 1, 1) for v in values), default=1)
    fraction_digits = max((max(-v.as_tuple().exponent, 0) for v in values), default=0)
    return max(28, integer_digits + fraction_digits + len(str(len(values))) + 3)


def format_amount(value: Decimal) -> str:
    """Two fraction digits, half-up. Zero is always '0.00', never '-0.00'."""
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus two decimals
        ctx.prec = max(28, value.adjusted() + 4)
        rounded = value.quantize(_CENTS, rounding=ROUND_HALF_UP)
    if rounded == 0:
        return ZERO_TOTAL
    return f"{rounded:.2f}"


def compute_total(items: Iterable[LineItem]) -> str:
    """Sum sanitized prices in order and format with two decimals"""
    prices = [sanitize_price(item.price) for item in items]
    total = Decimal("0")
    with localcontext() as ctx:
        ctx.prec = _digits_needed(prices)
        for price in prices:
            total += price
    return format_amount(total)
