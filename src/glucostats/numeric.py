"""Comparaciones de punto flotante compartidas por el cálculo de ejes."""

from __future__ import annotations

import math
import sys

# Margen en ulps; absorbe la deriva de sumar el múltiplo varias veces.
_ULP_FACTOR = 16.0


def almost_equal(a: float, b: float) -> bool:
    """Return True if ``a`` and ``b`` differ by less than a scaled epsilon.

    The tolerance is machine epsilon times the magnitude of the operands
    (never below 1.0), so it behaves the same near zero and for large values.
    """
    scale = max(1.0, abs(a), abs(b))
    return abs(a - b) <= _ULP_FACTOR * sys.float_info.epsilon * scale


def at_least(a: float, b: float) -> bool:
    """Return True if ``a >= b`` allowing for ``almost_equal`` drift."""
    return a > b or almost_equal(a, b)


def round_half_away(value: float) -> float:
    """Round to the nearest integer, ties away from zero (as labels are shown)."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


def displays_as_negative_zero(value: float) -> bool:
    """Return True if ``value`` is negative but its rounded label would be ``-0``."""
    return value < 0 and round_half_away(value) == 0
