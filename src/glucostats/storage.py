"""Persistencia SQLite para la configuración y el período seleccionado."""

from __future__ import annotations

import json
import sqlite3
from dataclasses import asdict, fields
from datetime import date
from pathlib import Path
from typing import Any

from glucostats.log import get_logger
from glucostats.model import GlucoseUnit, Thresholds
from glucostats.periods import Custom, PeriodSelector, Week, parse_period, period_name
from glucostats.settings import ChartSettings, QuickStatsSettings

logger = get_logger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS app_config (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


class SQLiteStore:
    """Repositorio SQLite clave/valor para la app."""

    def __init__(self, db_path: Path) -> None:
        """Create store and ensure schema exists."""
        self._db_path = db_path
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()

    def _load_values(self) -> dict[str, Any]:
        with self._connect() as conn:
            rows = conn.execute("SELECT key, value FROM app_config").fetchall()
        values: dict[str, Any] = {}
        for row in rows:
            try:
                values[row["key"]] = json.loads(row["value"])
            except json.JSONDecodeError:
                logger.warning("Ignoring unreadable config value for %r", row["key"])
        return values

    def _save_values(self, payload: dict[str, Any]) -> None:
        with self._connect() as conn:
            conn.executemany(
                """
                INSERT INTO app_config(key, value) VALUES(?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                [(key, json.dumps(value)) for key, value in payload.items()],
            )
            conn.commit()

    def load_settings(self) -> QuickStatsSettings:
        """Devuelve configuracion guardada o defaults."""
        values = self._load_values()
        defaults = QuickStatsSettings()
        unit = _parse_unit(values.get("unit"), defaults.unit)
        lower = _parse_number(values.get("lower"))
        upper = _parse_number(values.get("upper"))
        thresholds = None
        if lower is not None and upper is not None:
            thresholds = Thresholds(lower=lower, upper=upper)
        return QuickStatsSettings(
            unit=unit,
            thresholds=thresholds,
            week_start=_parse_week_start(
                values.get("week_start"), defaults.week_start
            ),
            timezone=values.get("timezone", defaults.timezone),
            chart=_parse_chart(values.get("chart"), defaults.chart),
        )

    def save_settings(self, settings: QuickStatsSettings) -> None:
        """Guarda la configuracion en tabla key/value."""
        thresholds = settings.thresholds
        self._save_values(
            {
                "unit": settings.unit.value,
                "lower": thresholds.lower if thresholds else None,
                "upper": thresholds.upper if thresholds else None,
                "week_start": settings.week_start,
                "timezone": settings.timezone,
                "chart": asdict(settings.chart),
            }
        )

    def load_period(self) -> PeriodSelector:
        """Devuelve el último período elegido (semana por defecto)."""
        values = self._load_values()
        name = values.get("period")
        if not isinstance(name, str):
            return Week()
        try:
            return parse_period(
                name,
                _parse_date(values.get("period_start")),
                _parse_date(values.get("period_end")),
            )
        except ValueError:
            logger.warning("Ignoring invalid stored period %r", name)
            return Week()

    def save_period(self, period: PeriodSelector) -> None:
        payload: dict[str, Any] = {
            "period": period_name(period),
            "period_start": None,
            "period_end": None,
        }
        if isinstance(period, Custom):
            payload["period_start"] = period.start.date().isoformat()
            payload["period_end"] = period.end.date().isoformat()
        self._save_values(payload)


def _parse_unit(raw: Any, default: GlucoseUnit) -> GlucoseUnit:
    if not isinstance(raw, str):
        return default
    try:
        return GlucoseUnit.parse(raw)
    except ValueError:
        return default


def _parse_date(raw: Any) -> date | None:
    if not isinstance(raw, str):
        return None
    return date.fromisoformat(raw)


def _parse_number(raw: Any) -> float | None:
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        return None
    return float(raw)


def _parse_week_start(raw: Any, default: int) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool) and 0 <= raw <= 6:
        return raw
    if raw is not None:
        logger.warning("Ignoring invalid stored week_start %r", raw)
    return default


def _parse_chart(raw: Any, default: ChartSettings) -> ChartSettings:
    if not isinstance(raw, dict):
        return default
    known = {f.name for f in fields(ChartSettings)}
    unknown = sorted(set(raw) - known)
    if unknown:
        logger.warning("Ignoring unknown chart settings %s", unknown)
    return ChartSettings(**{k: v for k, v in raw.items() if k in known})
