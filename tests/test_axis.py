from __future__ import annotations

import pytest

from glucostats.axis import chart_y_axis, generate_axis_ticks, tick_multiple
from glucostats.model import GlucoseUnit
from glucostats.numeric import displays_as_negative_zero
from glucostats.settings import ChartSettings


def _segments(ticks: list[float]) -> int:
    return len(ticks) - 1


def test_mandatory_range_only() -> None:
    ticks = generate_axis_ticks([], (0.0, 270.0), 25.0)
    assert ticks == [0.0, 75.0, 150.0, 225.0, 300.0]
    assert 2 <= _segments(ticks) <= 4
    assert not any(displays_as_negative_zero(t) for t in ticks)


def test_ticks_are_strictly_increasing_and_cover_data() -> None:
    data = [62.0, 143.0, 251.0, 98.0]
    ticks = generate_axis_ticks(data, (100.0, 175.0), 25.0)
    assert all(a < b for a, b in zip(ticks, ticks[1:]))
    assert ticks[0] <= min(data)
    assert ticks[-1] >= max(data)


def test_step_widens_until_segment_budget_fits() -> None:
    ticks = generate_axis_ticks([60.0, 250.0], (100.0, 175.0), 25.0)
    assert ticks == [50.0, 100.0, 150.0, 200.0, 250.0]


def test_soft_bound_minimum_allows_extra_segment() -> None:
    below = generate_axis_ticks([39.0], (100.0, 150.0), 25.0, soft_bound_minimum=40.0)
    above = generate_axis_ticks([41.0], (100.0, 150.0), 25.0, soft_bound_minimum=40.0)

    assert below == [25.0, 50.0, 75.0, 100.0, 125.0, 150.0]
    assert _segments(below) == 5
    assert above == [25.0, 75.0, 125.0, 175.0]
    assert _segments(above) <= 4


def test_without_soft_bound_uses_default_budget() -> None:
    ticks = generate_axis_ticks([39.0], (100.0, 150.0), 25.0)
    assert _segments(ticks) <= 4


def test_degenerate_range_gets_width_and_min_segments() -> None:
    ticks = generate_axis_ticks([], (100.0, 100.0), 25.0)
    assert ticks == [100.0, 125.0, 150.0]


def test_min_segment_count_extends_beyond_last_value() -> None:
    ticks = generate_axis_ticks([], (100.0, 125.0), 25.0, min_segment_count=3)
    assert ticks == [100.0, 125.0, 150.0, 175.0]


def test_padding_segment_when_value_on_edge() -> None:
    plain = generate_axis_ticks([], (100.0, 175.0), 25.0)
    padded = generate_axis_ticks(
        [], (100.0, 175.0), 25.0, add_padding_segment_if_edge=True
    )
    assert plain == [100.0, 125.0, 150.0, 175.0]
    assert padded == [75.0, 125.0, 175.0, 225.0]


def test_first_value_never_renders_as_negative_zero() -> None:
    ticks = generate_axis_ticks([-0.2], (0.0, 1.0), 0.25)
    assert ticks[0] == pytest.approx(-0.5)
    assert 0.0 in ticks
    assert not any(displays_as_negative_zero(t) for t in ticks)


def test_intermediate_negative_zero_widens_step() -> None:
    ticks = generate_axis_ticks([-0.6], (0.0, 0.5), 0.25)
    assert ticks == pytest.approx([-0.75, 0.0, 0.75])
    assert ticks[1] == 0.0
    assert not any(displays_as_negative_zero(t) for t in ticks)


def test_deterministic_output() -> None:
    data = [180.5, 66.2, 140.0, 39.9, 212.3]
    first = generate_axis_ticks(data, (80.0, 240.0), 40.0, soft_bound_minimum=40.0)
    second = generate_axis_ticks(data, (80.0, 240.0), 40.0, soft_bound_minimum=40.0)
    assert first == second


def test_empty_candidates_raise() -> None:
    with pytest.raises(ValueError, match="without data points"):
        generate_axis_ticks([], (), 25.0)  # type: ignore[arg-type]


def test_non_positive_multiple_raises() -> None:
    with pytest.raises(ValueError, match="positive"):
        generate_axis_ticks([100.0], (100.0, 175.0), 0.0)


def test_tick_multiple_per_unit() -> None:
    assert tick_multiple(GlucoseUnit.MG_DL, ChartSettings()) == 25.0
    assert tick_multiple(GlucoseUnit.MMOL_L, ChartSettings()) == 1.0
    assert tick_multiple(GlucoseUnit.MG_DL, ChartSettings(clamp_enabled=True)) == 40.0
    assert (
        tick_multiple(GlucoseUnit.MG_DL, ChartSettings(tick_multiple_override=20.0))
        == 20.0
    )
    assert (
        tick_multiple(GlucoseUnit.MMOL_L, ChartSettings(tick_multiple_override=20.0))
        == 1.0
    )


def test_chart_y_axis_default_range_mg_dl() -> None:
    assert chart_y_axis([], GlucoseUnit.MG_DL) == [100.0, 125.0, 150.0, 175.0]


def test_chart_y_axis_default_range_mmol() -> None:
    assert chart_y_axis([], GlucoseUnit.MMOL_L) == [5.0, 7.0, 9.0, 11.0]


def test_chart_y_axis_clamped() -> None:
    ticks = chart_y_axis([39.0], GlucoseUnit.MG_DL, ChartSettings(clamp_enabled=True))
    assert ticks == [0.0, 80.0, 160.0, 240.0]


def test_positive_ticks_below_half_are_not_snapped_to_zero() -> None:
    assert generate_axis_ticks([0.1], (0.0, 1.0), 0.25) == [0.0, 0.25, 0.5, 0.75, 1.0]
