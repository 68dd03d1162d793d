from __future__ import annotations

from datetime import datetime

import pytest

from glucostats.classify import classify_points, classify_value
from glucostats.model import GlucoseUnit, RangeCategory, Sample, Thresholds

_LIMITS = Thresholds(lower=70.0, upper=180.0)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (69.9, RangeCategory.LOW),
        (70.0, RangeCategory.IN_RANGE),
        (120.0, RangeCategory.IN_RANGE),
        (180.0, RangeCategory.IN_RANGE),
        (180.1, RangeCategory.HIGH),
    ],
)
def test_classify_value_boundaries(value: float, expected: RangeCategory) -> None:
    assert classify_value(value, _LIMITS) is expected


def test_classify_points_preserves_order() -> None:
    samples = [
        Sample(datetime(2024, 3, 15, 9, 0), 200.0),
        Sample(datetime(2024, 3, 15, 8, 0), 60.0),
        Sample(datetime(2024, 3, 15, 10, 0), 110.0),
    ]
    points = classify_points(samples, GlucoseUnit.MG_DL, _LIMITS)
    assert [p.timestamp for p in points] == [s.timestamp for s in samples]
    assert [p.category for p in points] == [
        RangeCategory.HIGH,
        RangeCategory.LOW,
        RangeCategory.IN_RANGE,
    ]


def test_classify_points_in_display_unit() -> None:
    limits = Thresholds.default_for(GlucoseUnit.MMOL_L)
    points = classify_points(
        [Sample(datetime(2024, 3, 15), 180.0)], GlucoseUnit.MMOL_L, limits
    )
    assert points[0].value == pytest.approx(180.0 / 18.01559)
    assert points[0].category is RangeCategory.IN_RANGE


def test_classify_points_empty() -> None:
    assert classify_points([], GlucoseUnit.MG_DL, _LIMITS) == []
