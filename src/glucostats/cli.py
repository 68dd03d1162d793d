"""CLI para calcular estadísticas rápidas de glucosa y el eje del gráfico."""

from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path

from glucostats.log import configure_logging
from glucostats.model import GlucoseUnit, StatsSummary, Thresholds
from glucostats.periods import parse_period
from glucostats.report_writer import write_snapshot_xlsx
from glucostats.sources.accuchek import AccuChekPaths, AccuChekSource
from glucostats.storage import SQLiteStore
from glucostats.view_model import QuickStatsViewModel


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Estadísticas rápidas de glucosa (Accu-Chek) y eje Y del gráfico."
    )
    parser.add_argument(
        "--data-dir",
        default=str(Path.home() / "proyectos" / "salud" / "glucosa" / "datos"),
        help="Carpeta con accuchek_*.json.",
    )
    parser.add_argument(
        "--period",
        choices=["today", "week", "month", "custom"],
        default=None,
        help="Período (default: el último guardado, o week).",
    )
    parser.add_argument("--start", type=date.fromisoformat, help="Inicio (custom).")
    parser.add_argument("--end", type=date.fromisoformat, help="Fin (custom).")
    parser.add_argument("--unit", type=GlucoseUnit.parse, help="mg/dL o mmol/L.")
    parser.add_argument("--lower", type=float, help="Límite bajo en la unidad.")
    parser.add_argument("--upper", type=float, help="Límite alto en la unidad.")
    parser.add_argument(
        "--clamp",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Rango de gráfico acotado (80-240 mg/dL, paso 40); se guarda.",
    )
    parser.add_argument(
        "--db",
        default=str(Path.cwd() / "glucostats.sqlite3"),
        help="Base SQLite con la configuración.",
    )
    parser.add_argument("--xlsx", help="Exportar el resultado a este .xlsx.")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING...")
    ns = parser.parse_args()
    if (ns.lower is None) != (ns.upper is None):
        parser.error("--lower y --upper se indican juntos")
    return ns


def format_summary(summary: StatsSummary, unit: GlucoseUnit) -> list[str]:
    """Human-readable summary lines."""
    if summary.count == 0:
        return ["Sin lecturas en el período."]
    digits = 0 if unit is GlucoseUnit.MG_DL else 1
    return [
        f"Lecturas: {summary.count}",
        f"Promedio: {summary.mean:.{digits}f} {unit.value}",
        f"Mediana: {summary.median:.{digits}f} {unit.value}",
        f"HbA1c estimada: {summary.hba1c_estimate:.1f} %",
        (
            f"Bajo {summary.percent_low:.1f} % | "
            f"En rango {summary.percent_in_range:.1f} % | "
            f"Alto {summary.percent_high:.1f} %"
        ),
    ]


def main() -> int:
    """Run the statistics CLI.

    Returns:
        Exit code (0 on success, 1 if samples could not be read).
    """
    ns = parse_args()
    configure_logging(ns.log_level)

    store = SQLiteStore(Path(ns.db).expanduser())
    settings = store.load_settings()
    if ns.unit is not None and ns.unit is not settings.unit:
        # los umbrales guardados están en la unidad anterior
        settings = replace(settings, unit=ns.unit, thresholds=None)
    if ns.lower is not None:
        settings = replace(settings, thresholds=Thresholds(ns.lower, ns.upper))
    if ns.clamp is not None:
        settings = replace(
            settings, chart=replace(settings.chart, clamp_enabled=ns.clamp)
        )

    period = (
        parse_period(ns.period, ns.start, ns.end)
        if ns.period is not None
        else store.load_period()
    )

    source = AccuChekSource(AccuChekPaths(root=Path(ns.data_dir).expanduser()))
    source.validate()

    vm = QuickStatsViewModel(source, settings, period)
    if not vm.refresh(datetime.now()) or vm.snapshot is None:
        print(f"ERROR: {vm.last_error}")
        return 1

    store.save_settings(settings)
    store.save_period(period)

    snapshot = vm.snapshot
    interval = snapshot.interval
    print(f"Período: {interval.start:%Y-%m-%d %H:%M} - {interval.end:%Y-%m-%d %H:%M}")
    for line in format_summary(snapshot.summary, settings.unit):
        print(line)
    print("Eje Y: " + ", ".join(f"{v:g}" for v in snapshot.y_axis))

    if ns.xlsx:
        out_path = Path(ns.xlsx).expanduser()
        write_snapshot_xlsx(snapshot, settings.unit, out_path)
        print(f"OK: Output: {out_path}")
    return 0
