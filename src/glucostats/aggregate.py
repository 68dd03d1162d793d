"""Estadísticas de glucosa: promedio, mediana, HbA1c estimada y tiempo en rango."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from glucostats.classify import classify_value
from glucostats.model import (
    GlucoseUnit,
    RangeCategory,
    Sample,
    StatsSummary,
    Thresholds,
)

# Relación ADAG: HbA1c (%) = (glucosa media mg/dL + 46.7) / 28.7
HBA1C_OFFSET_MG_DL = 46.7
HBA1C_SLOPE_MG_DL = 28.7

FRAME_COLUMNS = ["datetime", "value", "mg_dl", "category"]


def estimate_hba1c(mean_mg_dl: float) -> float:
    """Estimate HbA1c (%) from the mean glucose in mg/dL."""
    return (mean_mg_dl + HBA1C_OFFSET_MG_DL) / HBA1C_SLOPE_MG_DL


def samples_to_frame(
    samples: Sequence[Sample],
    unit: GlucoseUnit,
    thresholds: Thresholds,
) -> pd.DataFrame:
    """Convert samples to a DataFrame with display value, mg/dL value and band."""
    rows = []
    for s in samples:
        value = s.value_in(unit)
        rows.append(
            {
                "datetime": s.timestamp,
                "value": value,
                "mg_dl": s.value_in(GlucoseUnit.MG_DL),
                "category": classify_value(value, thresholds).value,
            }
        )
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def median_of(values: Sequence[float]) -> float:
    """Median of a non-empty sequence (mean of the two central values if even)."""
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def summarize_samples(
    samples: Sequence[Sample],
    unit: GlucoseUnit,
    thresholds: Thresholds,
) -> StatsSummary:
    """Compute dashboard statistics for one batch of samples.

    Input order does not matter. An empty batch yields ``StatsSummary.empty()``.

    Args:
        samples: Samples for the resolved period.
        unit: Display unit for mean/median.
        thresholds: Low/high limits in the display unit.

    Returns:
        Summary with count, mean, median, HbA1c estimate and band percentages.
    """
    df = samples_to_frame(samples, unit, thresholds)
    if df.empty:
        return StatsSummary.empty()

    count = len(df)
    values = df["value"].astype(float)
    # HbA1c siempre sobre mg/dL, aunque la unidad de pantalla sea mmol/L
    mean_mg_dl = float(df["mg_dl"].astype(float).mean())
    bands = df["category"].value_counts()

    def percent(category: RangeCategory) -> float:
        return int(bands.get(category.value, 0)) / count * 100.0

    return StatsSummary(
        count=count,
        mean=float(values.mean()),
        median=median_of(values.tolist()),
        hba1c_estimate=estimate_hba1c(mean_mg_dl),
        percent_low=percent(RangeCategory.LOW),
        percent_in_range=percent(RangeCategory.IN_RANGE),
        percent_high=percent(RangeCategory.HIGH),
    )
