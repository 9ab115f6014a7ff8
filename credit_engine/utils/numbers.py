"""Rounding helpers for currency amounts and scores"""

from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3), unlike built-in round()"""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_currency(value: float, places: int = 2) -> float:
    """Round half-up to a fixed number of decimal places"""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
