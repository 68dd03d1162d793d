"""Exportación a Excel de un snapshot (lecturas clasificadas + resumen)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, Side

from glucostats.model import GlucoseUnit, RangeCategory
from glucostats.view_model import QuickStatsSnapshot

_DIA_SEMANA: tuple[str, ...] = ("lun", "mar", "mie", "jue", "vie", "sab", "dom")

_CATEGORY_LABELS: dict[RangeCategory, str] = {
    RangeCategory.LOW: "Bajo",
    RangeCategory.IN_RANGE: "En rango",
    RangeCategory.HIGH: "Alto",
}

_NUMBER_FORMATS: dict[GlucoseUnit, str] = {
    GlucoseUnit.MG_DL: "0",
    GlucoseUnit.MMOL_L: "0.0",
}


@dataclass(frozen=True)
class ReportLayout:
    """Sheet names for the exported workbook."""

    readings_sheet: str = "Lecturas"
    summary_sheet: str = "Resumen"


def points_frame(snapshot: QuickStatsSnapshot, unit: GlucoseUnit) -> pd.DataFrame:
    """One row per classified point: Día, Fecha / Hora, Glucosa, Rango."""
    glucose_header = f"Glucosa ({unit.value})"
    rows = [
        {
            "Día": _DIA_SEMANA[p.timestamp.weekday()],
            "Fecha / Hora": p.timestamp.replace(tzinfo=None),
            glucose_header: p.value,
            "Rango": _CATEGORY_LABELS[p.category],
        }
        for p in snapshot.points
    ]
    return pd.DataFrame(rows, columns=["Día", "Fecha / Hora", glucose_header, "Rango"])


def summary_frame(snapshot: QuickStatsSnapshot, unit: GlucoseUnit) -> pd.DataFrame:
    """Two-column table (Métrica, Valor) with the snapshot statistics."""
    s = snapshot.summary

    def fmt(value: float | None, digits: int) -> object:
        return "" if value is None else round(value, digits)

    digits = 0 if unit is GlucoseUnit.MG_DL else 1
    rows = [
        ("Desde", snapshot.interval.start.replace(tzinfo=None)),
        ("Hasta", snapshot.interval.end.replace(tzinfo=None)),
        ("Lecturas", s.count),
        (f"Promedio ({unit.value})", fmt(s.mean, digits)),
        (f"Mediana ({unit.value})", fmt(s.median, digits)),
        ("HbA1c estimada (%)", fmt(s.hba1c_estimate, 1)),
        ("Bajo (%)", round(s.percent_low, 1)),
        ("En rango (%)", round(s.percent_in_range, 1)),
        ("Alto (%)", round(s.percent_high, 1)),
    ]
    return pd.DataFrame(rows, columns=["Métrica", "Valor"])


def write_snapshot_xlsx(
    snapshot: QuickStatsSnapshot,
    unit: GlucoseUnit,
    out_path: Path,
    layout: ReportLayout | None = None,
) -> None:
    """Write a formatted workbook with the readings and the summary.

    Args:
        snapshot: Published refresh result.
        unit: Display unit of the snapshot values.
        out_path: Output path for the XLSX file.
        layout: Sheet names.
    """
    layout = layout or ReportLayout()
    out_path.parent.mkdir(parents=True, exist_ok=True)

    readings = points_frame(snapshot, unit)
    summary = summary_frame(snapshot, unit)

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        readings.to_excel(writer, index=False, sheet_name=layout.readings_sheet)
        summary.to_excel(writer, index=False, sheet_name=layout.summary_sheet)
        ws = writer.book[layout.readings_sheet]
        _format_sheet(ws, {"Día": 6, "Fecha / Hora": 18, "Rango": 10})
        _apply_glucose_format(ws, _NUMBER_FORMATS[unit])
        _format_sheet(writer.book[layout.summary_sheet], {"Métrica": 22, "Valor": 20})


def _format_sheet(ws: Any, widths: dict[str, int]) -> None:
    """Apply header style, borders and column widths to a worksheet."""
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.alignment = center
        cell.border = border
    for row in ws.iter_rows(min_row=2):
        for cell in row:
            cell.alignment = center
            cell.border = border

    for cell in ws[1]:
        width = widths.get(str(cell.value))
        if width is not None:
            ws.column_dimensions[cell.column_letter].width = width


def _apply_glucose_format(ws: Any, number_format: str) -> None:
    for cell in ws[1]:
        if str(cell.value).startswith("Glucosa"):
            ws.column_dimensions[cell.column_letter].width = 14
            for row in ws.iter_rows(min_row=2, min_col=cell.column, max_col=cell.column):
                row[0].number_format = number_format
        elif cell.value == "Fecha / Hora":
            for row in ws.iter_rows(min_row=2, min_col=cell.column, max_col=cell.column):
                row[0].number_format = "dd/mm/yyyy hh:mm"
