from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import cast

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from glucostats.model import GlucoseUnit, Sample
from glucostats.periods import Today, resolve_period
from glucostats.report_writer import ReportLayout, write_snapshot_xlsx
from glucostats.settings import QuickStatsSettings
from glucostats.view_model import QuickStatsSnapshot, build_snapshot


def _snapshot(samples: list[Sample]) -> QuickStatsSnapshot:
    now = datetime(2025, 12, 15, 12, 0)
    return build_snapshot(
        Today(), resolve_period(Today(), now), samples, QuickStatsSettings()
    )


def test_write_snapshot_xlsx_readings_and_summary(tmp_path: Path) -> None:
    """Una fila por lectura con Día, Fecha / Hora, Glucosa y Rango."""
    snapshot = _snapshot(
        [
            Sample(datetime(2025, 12, 15, 8, 30), 105.0),
            Sample(datetime(2025, 12, 15, 9, 45), 62.0),
        ]
    )
    out = tmp_path / "nested" / "out.xlsx"
    write_snapshot_xlsx(snapshot, GlucoseUnit.MG_DL, out)

    wb = load_workbook(out)
    ws = cast(Worksheet, wb[ReportLayout().readings_sheet])
    headers = [cell.value for cell in ws[1]]
    assert headers == ["Día", "Fecha / Hora", "Glucosa (mg/dL)", "Rango"]
    assert ws.cell(row=2, column=1).value == "lun"
    assert ws.cell(row=2, column=3).value == 105.0
    assert ws.cell(row=2, column=4).value == "En rango"
    assert ws.cell(row=3, column=4).value == "Bajo"
    assert ws.cell(row=2, column=3).number_format == "0"
    assert ws.cell(row=1, column=1).font.bold is True
    assert ws.column_dimensions["A"].width == 6

    summary = cast(Worksheet, wb[ReportLayout().summary_sheet])
    rows = {r[0]: r[1] for r in summary.iter_rows(min_row=2, values_only=True)}
    assert rows["Lecturas"] == 2
    assert rows["Bajo (%)"] == 50.0
    assert rows["Mediana (mg/dL)"] == 84


def test_write_snapshot_xlsx_without_readings(tmp_path: Path) -> None:
    out = tmp_path / "empty.xlsx"
    write_snapshot_xlsx(_snapshot([]), GlucoseUnit.MMOL_L, out)

    wb = load_workbook(out)
    ws = cast(Worksheet, wb[ReportLayout().readings_sheet])
    assert [cell.value for cell in ws[1]] == [
        "Día",
        "Fecha / Hora",
        "Glucosa (mmol/L)",
        "Rango",
    ]
    assert ws.max_row == 1

    summary = cast(Worksheet, wb[ReportLayout().summary_sheet])
    rows = {r[0]: r[1] for r in summary.iter_rows(min_row=2, values_only=True)}
    assert rows["Lecturas"] == 0
    # Excel guarda celdas vacías como None
    assert rows["Promedio (mmol/L)"] in ("", None)
