"""Modelos tipados para muestras de glucosa, umbrales y resúmenes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

# 1 mmol/L de glucosa (masa molar 180.1559 g/mol) expresado en mg/dL.
MG_DL_PER_MMOL_L = 18.01559


class GlucoseUnit(Enum):
    """Concentration unit used for display and conversion."""

    MG_DL = "mg/dL"
    MMOL_L = "mmol/L"

    def convert(self, value: float, to: GlucoseUnit) -> float:
        """Convert ``value`` expressed in this unit to ``to``."""
        if self is to:
            return value
        if self is GlucoseUnit.MG_DL:
            return value / MG_DL_PER_MMOL_L
        return value * MG_DL_PER_MMOL_L

    @classmethod
    def parse(cls, raw: str) -> GlucoseUnit:
        """Parse ``mg/dL``, ``mgdl``, ``mmol/L`` or ``mmol`` (case-insensitive)."""
        key = raw.strip().lower().replace("/", "").replace("_", "")
        if key in ("mgdl", "mg"):
            return cls.MG_DL
        if key in ("mmoll", "mmol"):
            return cls.MMOL_L
        raise ValueError(f"Unknown glucose unit: {raw!r}")


class RangeCategory(Enum):
    """Band a glucose value falls into."""

    LOW = "low"
    IN_RANGE = "in_range"
    HIGH = "high"


@dataclass(frozen=True)
class Sample:
    """One glucose measurement event (timestamped)."""

    timestamp: datetime
    concentration: float
    unit: GlucoseUnit = GlucoseUnit.MG_DL

    def value_in(self, unit: GlucoseUnit) -> float:
        return self.unit.convert(self.concentration, unit)


@dataclass(frozen=True)
class Thresholds:
    """Low/high limits in the display unit.

    ``lower < upper`` is expected from the caller and not re-validated.
    """

    lower: float
    upper: float

    @classmethod
    def default_for(cls, unit: GlucoseUnit) -> Thresholds:
        """Return the 70-180 mg/dL target band expressed in ``unit``."""
        return cls(
            lower=GlucoseUnit.MG_DL.convert(70.0, unit),
            upper=GlucoseUnit.MG_DL.convert(180.0, unit),
        )


@dataclass(frozen=True)
class ResolvedInterval:
    """Concrete time span for a period selection (``start <= end``)."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class ClassifiedPoint:
    """Chart point tagged with its range category."""

    timestamp: datetime
    value: float
    category: RangeCategory


@dataclass(frozen=True)
class StatsSummary:
    """Dashboard statistics for one batch of samples.

    ``mean``, ``median`` and ``hba1c_estimate`` are None when there is no data.
    """

    count: int
    mean: float | None
    median: float | None
    hba1c_estimate: float | None
    percent_low: float
    percent_in_range: float
    percent_high: float

    @classmethod
    def empty(cls) -> StatsSummary:
        return cls(
            count=0,
            mean=None,
            median=None,
            hba1c_estimate=None,
            percent_low=0.0,
            percent_in_range=0.0,
            percent_high=0.0,
        )
