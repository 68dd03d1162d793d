"""Orquestación de refrescos: período -> muestras -> estadísticas, puntos y eje."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from glucostats.aggregate import summarize_samples
from glucostats.axis import chart_y_axis
from glucostats.classify import classify_points
from glucostats.log import get_logger
from glucostats.model import ClassifiedPoint, ResolvedInterval, Sample, StatsSummary
from glucostats.periods import PeriodSelector, Week, resolve_period
from glucostats.settings import QuickStatsSettings
from glucostats.sources.base import SampleSource, SampleSourceError

logger = get_logger(__name__)


@dataclass(frozen=True)
class QuickStatsSnapshot:
    """Everything the dashboard renders for one refresh."""

    period: PeriodSelector
    interval: ResolvedInterval
    summary: StatsSummary
    points: tuple[ClassifiedPoint, ...]
    y_axis: tuple[float, ...]


def build_snapshot(
    period: PeriodSelector,
    interval: ResolvedInterval,
    samples: Sequence[Sample],
    settings: QuickStatsSettings,
) -> QuickStatsSnapshot:
    """Run the statistics and chart pipeline over one batch of samples."""
    thresholds = settings.effective_thresholds()
    points = classify_points(samples, settings.unit, thresholds)
    ticks = chart_y_axis([p.value for p in points], settings.unit, settings.chart)
    return QuickStatsSnapshot(
        period=period,
        interval=interval,
        summary=summarize_samples(samples, settings.unit, thresholds),
        points=tuple(points),
        y_axis=tuple(ticks),
    )


class QuickStatsViewModel:
    """Holds the selected period and the latest published snapshot.

    Each refresh publishes a new immutable snapshot with a single assignment;
    the last refresh to complete wins. A failed fetch keeps the previous
    snapshot.
    """

    def __init__(
        self,
        source: SampleSource,
        settings: QuickStatsSettings | None = None,
        selected_period: PeriodSelector | None = None,
    ) -> None:
        self._source = source
        self.settings = settings or QuickStatsSettings()
        self.selected_period: PeriodSelector = selected_period or Week()
        self.snapshot: QuickStatsSnapshot | None = None
        self.last_error: SampleSourceError | None = None

    def select_period(self, period: PeriodSelector, now: datetime | None = None) -> bool:
        """Change the selected period and refresh."""
        self.selected_period = period
        return self.refresh(now)

    def update_settings(self, settings: QuickStatsSettings, now: datetime | None = None) -> bool:
        self.settings = settings
        return self.refresh(now)

    def refresh(self, now: datetime | None = None) -> bool:
        """Fetch samples for the selected period and publish a snapshot.

        Returns:
            True if a new snapshot was published, False if the fetch failed.
        """
        period = self.selected_period
        settings = self.settings
        interval = resolve_period(
            period,
            now or datetime.now(),
            week_start=settings.week_start,
            tz=settings.tzinfo(),
        )

        try:
            samples = self._source.get_samples(interval.start, interval.end)
        except SampleSourceError as exc:
            logger.warning("Failed to fetch glucose data: %s", exc)
            self.last_error = exc
            return False

        self.snapshot = build_snapshot(period, interval, samples, settings)
        self.last_error = None
        logger.info(
            "refreshed %s..%s: %d samples",
            interval.start,
            interval.end,
            self.snapshot.summary.count,
        )
        return True
