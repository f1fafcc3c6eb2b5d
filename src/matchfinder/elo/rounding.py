"""Half-up rounding shared by the modifier and rating calculators."""

from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float, places: int = 0) -> float:
    """
    Round like a person would: 2.5 -> 3, 1.385 -> 1.39.

    Python's round() uses banker's rounding (2.5 -> 2), which would shift
    ratings by a point on exact halves.

    The float goes through str() first so 1.15 * 1.20 (stored as
    1.3799999999999999) still rounds to 1.38.
    """
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def round_to_int(value: float) -> int:
    return int(round_half_up(value))
