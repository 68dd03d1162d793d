"""Clasificación de puntos del gráfico por rango (bajo/en rango/alto)."""

from __future__ import annotations

from collections.abc import Sequence

from glucostats.model import (
    ClassifiedPoint,
    GlucoseUnit,
    RangeCategory,
    Sample,
    Thresholds,
)


def classify_value(value: float, thresholds: Thresholds) -> RangeCategory:
    """Return the band for ``value``; both limits count as in range."""
    if value < thresholds.lower:
        return RangeCategory.LOW
    if value > thresholds.upper:
        return RangeCategory.HIGH
    return RangeCategory.IN_RANGE


def classify_points(
    samples: Sequence[Sample],
    unit: GlucoseUnit,
    thresholds: Thresholds,
) -> list[ClassifiedPoint]:
    """Map each sample to a chart point, preserving input order.

    Args:
        samples: Glucose samples in any unit.
        unit: Display unit the points are expressed in.
        thresholds: Limits in the display unit.

    Returns:
        One classified point per sample.
    """
    points: list[ClassifiedPoint] = []
    for sample in samples:
        value = sample.value_in(unit)
        points.append(
            ClassifiedPoint(
                timestamp=sample.timestamp,
                value=value,
                category=classify_value(value, thresholds),
            )
        )
    return points
