"""Configuración explícita de estadísticas y del eje Y del gráfico."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import tzinfo

from dateutil import tz

from glucostats.model import GlucoseUnit, Thresholds

DEFAULT_DISPLAY_RANGE_MG_DL: tuple[float, float] = (100.0, 175.0)
CLAMPED_DISPLAY_RANGE_MG_DL: tuple[float, float] = (80.0, 240.0)
CLAMPED_STEP_MG_DL = 40.0
CLAMPED_SOFT_BOUND_MINIMUM_MG_DL = 40.0


@dataclass(frozen=True)
class ChartSettings:
    """Y-axis generation policy.

    ``clamp_enabled`` selects the clamped display range together with the
    40 mg/dL step and soft bound, unless those are given explicitly.
    """

    clamp_enabled: bool = False
    tick_multiple_override: float | None = None
    soft_bound_minimum_mg_dl: float | None = None
    min_segment_count: int = 2
    max_segment_count: int = 4
    extended_max_segment_count: int = 5
    add_padding_segment_if_edge: bool = False

    def display_range_mg_dl(self) -> tuple[float, float]:
        if self.clamp_enabled:
            return CLAMPED_DISPLAY_RANGE_MG_DL
        return DEFAULT_DISPLAY_RANGE_MG_DL

    def step_override_mg_dl(self) -> float | None:
        if self.tick_multiple_override is not None:
            return self.tick_multiple_override
        return CLAMPED_STEP_MG_DL if self.clamp_enabled else None

    def soft_bound_mg_dl(self) -> float | None:
        if self.soft_bound_minimum_mg_dl is not None:
            return self.soft_bound_minimum_mg_dl
        return CLAMPED_SOFT_BOUND_MINIMUM_MG_DL if self.clamp_enabled else None


@dataclass(frozen=True)
class QuickStatsSettings:
    """User-facing configuration for one statistics screen."""

    unit: GlucoseUnit = GlucoseUnit.MG_DL
    thresholds: Thresholds | None = None
    week_start: int = calendar.MONDAY
    timezone: str | None = None
    chart: ChartSettings = field(default_factory=ChartSettings)

    def effective_thresholds(self) -> Thresholds:
        """Configured thresholds, or the 70-180 mg/dL band in the display unit."""
        if self.thresholds is not None:
            return self.thresholds
        return Thresholds.default_for(self.unit)

    def tzinfo(self) -> tzinfo | None:
        if not self.timezone:
            return None
        zone = tz.gettz(self.timezone)
        if zone is None:
            raise ValueError(f"Unknown timezone: {self.timezone!r}")
        return zone
