"""Float intake for prices and sizes.

Floats are snapped to the exchange's 8-decimal grid instead of being taken
through their repr, so computed values such as ``0.1 + 0.2`` are accepted.
A float that lands too far from the grid is an ``EncodingFailure``.
"""

from __future__ import annotations

import math
from decimal import Decimal

from core.errors import EncodingFailure

WIRE_TOLERANCE = 1e-12
HASH_TOLERANCE = 1e-3


def _check_finite(x: float) -> None:
    if not math.isfinite(x):
        raise EncodingFailure(f"not a finite number: {x!r}")


def float_to_decimal(x: float) -> Decimal:
    """*x* rounded to 8 decimals, provided the rounding moves it by < 1e-12.

    >>> float_to_decimal(0.1 + 0.2)
    Decimal('0.30000000')
    """
    _check_finite(x)
    rounded = Decimal(f"{x:.8f}")
    if abs(float(rounded) - x) >= WIRE_TOLERANCE:
        raise EncodingFailure(f"{x!r} is not representable with 8 decimals")
    if rounded == 0:
        return Decimal(0)
    return rounded


def float_to_int_for_hashing(x: float) -> int:
    """``round(x * 1e8)``, provided ``x * 1e8`` is within 1e-3 of an integer."""
    _check_finite(x)
    scaled = x * 1e8
    nearest = round(scaled)
    if abs(nearest - scaled) >= HASH_TOLERANCE:
        raise EncodingFailure(f"{x!r} cannot be hashed at 1e-8 precision")
    return int(nearest)
