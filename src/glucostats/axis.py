"""Generación de valores del eje Y (ticks) para el gráfico de glucosa."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator

from glucostats.log import get_logger
from glucostats.model import GlucoseUnit
from glucostats.numeric import almost_equal, at_least, displays_as_negative_zero
from glucostats.settings import ChartSettings

logger = get_logger(__name__)

MG_DL_MULTIPLE = 25.0
MMOL_L_MULTIPLE = 1.0


def _align_down(value: float, multiple: float) -> float:
    remainder = value % multiple
    if almost_equal(remainder, multiple):
        return (value - remainder) + multiple
    return value - remainder


def _align_up(value: float, multiple: float) -> float:
    remainder = value % multiple
    if almost_equal(remainder, 0.0):
        return value - remainder
    return (value - remainder) + multiple


def _stride(start: float, stop: float, step: float) -> Iterator[float]:
    """Yield ``start + i * step`` while below ``stop`` (``stop`` excluded)."""
    i = 0
    value = start
    while value < stop:
        yield value
        i += 1
        value = start + i * step


def _exceeds(count: float, limit: float) -> bool:
    return count > limit and not almost_equal(count, limit)


def _ceil(count: float) -> int:
    nearest = round(count)
    if almost_equal(count, nearest):
        return int(nearest)
    return math.ceil(count)


def generate_axis_ticks(
    data_values: Iterable[float],
    mandatory_range: tuple[float, float],
    multiple: float,
    *,
    min_segment_count: int = 2,
    max_segment_count: int = 4,
    extended_max_segment_count: int = 5,
    soft_bound_minimum: float | None = None,
    add_padding_segment_if_edge: bool = False,
) -> list[float]:
    """Compute evenly spaced axis values covering the data and a mandatory range.

    The first value is aligned down and the last value up to ``multiple``. The
    step is widened by ``multiple`` until the number of segments fits the
    budget and no value in between would be labelled ``-0``.

    Args:
        data_values: Values that must be visible (may be empty).
        mandatory_range: Bounds that are always spanned.
        multiple: Base tick spacing.
        min_segment_count: Minimum number of segments.
        max_segment_count: Segment budget.
        extended_max_segment_count: Budget used when the lowest value is
            below ``soft_bound_minimum``.
        soft_bound_minimum: Lower soft bound, same unit as the values.
        add_padding_segment_if_edge: Add one segment when a value sits exactly
            on the first or last aligned boundary.

    Returns:
        Strictly increasing tick values.

    Raises:
        ValueError: If there is nothing to span, the range is inverted or
            ``multiple`` is not positive.
    """
    if multiple <= 0:
        raise ValueError(f"Tick multiple must be positive, got {multiple}")

    values = sorted([*data_values, *mandatory_range])
    if not values:
        raise ValueError("Cannot generate axis values without data points")

    first = values[0]
    last = values[-1]
    if not at_least(last, first):
        raise ValueError(f"Invalid range generating axis values: {first}..{last}")

    if soft_bound_minimum is not None and first < soft_bound_minimum:
        max_count = extended_max_segment_count
    else:
        max_count = max_segment_count

    if almost_equal(first, last):
        last = last + 1

    first_value = _align_down(first, multiple)
    last_value = _align_up(last, multiple)

    if add_padding_segment_if_edge and almost_equal(first_value, first):
        first_value -= multiple

    # no mostrar la primera etiqueta como -0
    while displays_as_negative_zero(first_value):
        first_value -= multiple

    if add_padding_segment_if_edge and almost_equal(last_value, last):
        last_value += multiple

    distance = last_value - first_value
    factor = 1
    step = multiple
    segment_count = distance / step
    while _exceeds(segment_count, max_count) or any(
        displays_as_negative_zero(v) for v in _stride(first_value, last_value, step)
    ):
        factor += 1
        step = multiple * factor
        segment_count = distance / step

    segments = max(_ceil(segment_count), min_segment_count)

    ticks: list[float] = []
    for segment in range(segments + 1):
        scalar = first_value + segment * step
        # un valor que se vería como 0 tiene que ser 0 para dibujar la línea del cero
        if almost_equal(scalar, 0.0) or displays_as_negative_zero(scalar):
            scalar = 0.0
        ticks.append(scalar)

    logger.debug(
        "axis ticks for %s..%s (multiple=%s, max=%s): %s",
        first,
        last,
        multiple,
        max_count,
        ticks,
    )
    return ticks


def tick_multiple(unit: GlucoseUnit, settings: ChartSettings) -> float:
    """Base tick spacing for the display unit."""
    if unit is GlucoseUnit.MMOL_L:
        return MMOL_L_MULTIPLE
    override = settings.step_override_mg_dl()
    return override if override is not None else MG_DL_MULTIPLE


def chart_y_axis(
    points: Iterable[float],
    unit: GlucoseUnit,
    settings: ChartSettings | None = None,
) -> list[float]:
    """Y-axis ticks for glucose chart values expressed in ``unit``."""
    settings = settings or ChartSettings()
    low, high = settings.display_range_mg_dl()
    display_range = (
        GlucoseUnit.MG_DL.convert(low, unit),
        GlucoseUnit.MG_DL.convert(high, unit),
    )
    soft_bound = settings.soft_bound_mg_dl()
    if soft_bound is not None:
        soft_bound = GlucoseUnit.MG_DL.convert(soft_bound, unit)

    return generate_axis_ticks(
        points,
        display_range,
        tick_multiple(unit, settings),
        min_segment_count=settings.min_segment_count,
        max_segment_count=settings.max_segment_count,
        extended_max_segment_count=settings.extended_max_segment_count,
        soft_bound_minimum=soft_bound,
        add_padding_segment_if_edge=settings.add_padding_segment_if_edge,
    )
