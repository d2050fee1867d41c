"""
Integer-safe money arithmetic in minor units (cents/kobo).

Amounts come in as major-unit strings or numbers and are converted to an
integer count of minor units for every calculation, so 0.1 + 0.2 is exactly
0.30. Nothing here raises: unparseable input becomes NaN, which is_valid
rejects upstream.

Limitation: every currency is scaled by 100. Currencies with zero (JPY) or
three (KWD) minor digits are not handled and must not be passed through these
helpers until a per-currency exponent is added.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

Amount = Union[str, int, float, Decimal]

MINOR_UNITS_PER_MAJOR = 100
MAX_AMOUNT = 1_000_000_000  # Sanity ceiling in major units

CURRENCY_SYMBOLS = {
    "USD": "$",
    "GBP": "£",
    "EUR": "€",
    "NGN": "₦",
    "GHS": "GH₵",
    "ZAR": "R",
    "KES": "KSh",
}

_NAN = Decimal("NaN")


def _parse(amount: Amount) -> Decimal:
    """Parse a major-unit amount into a Decimal, NaN when it is not a number"""
    if isinstance(amount, bool):
        return _NAN
    if isinstance(amount, Decimal):
        return _NAN if amount.is_snan() else amount
    if isinstance(amount, float):
        # repr gives the shortest string that round-trips, so 19.99 stays 19.99
        return Decimal(repr(amount))
    if isinstance(amount, int):
        return Decimal(amount)
    if isinstance(amount, str):
        try:
            parsed = Decimal(amount.strip())
        except InvalidOperation:
            return _NAN
        return _NAN if parsed.is_snan() else parsed
    return _NAN


def to_minor(amount: Amount) -> Union[int, float]:
    """
    Convert major units to minor units, rounding half away from zero.

    Returns NaN (or +/-inf) as a float when the amount is not a finite number.

    Example:
        "10.50" -> 1050
        0.1 + 0.2 -> 30
    """
    value = _parse(amount)
    if not value.is_finite():
        return float(value)
    try:
        return int((value * MINOR_UNITS_PER_MAJOR).to_integral_value(rounding=ROUND_HALF_UP))
    except ArithmeticError:
        # Exponent beyond the decimal context
        return float("nan")


def to_major(minor_amount: Union[int, float]) -> float:
    """Convert minor units back to major units, +/-inf past float range"""
    try:
        return minor_amount / MINOR_UNITS_PER_MAJOR
    except OverflowError:
        return float("inf") if minor_amount > 0 else float("-inf")


def _minor_sum(a: Union[int, float], b: Union[int, float]) -> Union[int, float]:
    try:
        return a + b
    except OverflowError:
        # A non-finite float met an int past float range; the float decides
        return a if isinstance(a, float) else b


def add(a: Amount, b: Amount) -> float:
    return to_major(_minor_sum(to_minor(a), to_minor(b)))


def subtract(a: Amount, b: Amount) -> float:
    return to_major(_minor_sum(to_minor(a), -to_minor(b)))


def compare(a: Amount, b: Amount) -> int:
    """Return -1, 0 or 1 comparing a to b in minor units"""
    diff = _minor_sum(to_minor(a), -to_minor(b))
    if diff < 0:
        return -1
    if diff > 0:
        return 1
    return 0


def format_amount(amount: Amount, currency: str = "USD") -> str:
    """
    Format a major-unit amount with its currency symbol and two decimals.

    Unknown currencies fall back to the code followed by a space
    ("XYZ 10.50").
    """
    code = currency.upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    minor = to_minor(amount)
    if isinstance(minor, float):
        return f"{symbol}{minor}"
    sign = "-" if minor < 0 else ""
    whole, cents = divmod(abs(minor), MINOR_UNITS_PER_MAJOR)
    return f"{symbol}{sign}{whole}.{cents:02d}"


def is_valid(amount: Amount) -> bool:
    """True when the amount is a finite number above zero and within MAX_AMOUNT"""
    value = _parse(amount)
    if not value.is_finite():
        return False
    return 0 < value <= MAX_AMOUNT
