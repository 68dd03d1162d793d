"""Lectura de exportaciones JSON de Accu-Chek como fuente de muestras."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Any

from dateutil import tz

from glucostats.log import get_logger
from glucostats.model import GlucoseUnit, Sample
from glucostats.sources.base import SampleSource, SampleSourceError, SourcePaths

logger = get_logger(__name__)

_LOCAL_TZ = tz.tzlocal()


@dataclass(frozen=True)
class AccuChekPaths(SourcePaths):
    """Paths for Accu-Chek JSON exports."""

    # root: folder containing accuchek_*.json


class AccuChekSource(SampleSource):
    """Sample source backed by the newest Accu-Chek JSON export."""

    def __init__(self, paths: AccuChekPaths, local_tz: tzinfo | None = None) -> None:
        """Create the source.

        Args:
            paths: Export directory.
            local_tz: Timezone of the export's wall-clock timestamps.
        """
        self._paths = paths
        self._tz = local_tz or _LOCAL_TZ

    def validate(self) -> None:
        """Validate that the Accu-Chek export directory exists."""
        if not self._paths.root.exists():
            raise SampleSourceError(f"Export directory not found: {self._paths.root}")

    def newest_json(self) -> Path:
        """Return newest accuchek_*.json by mtime."""
        files = sorted(
            self._paths.root.glob("accuchek_*.json"),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        if not files:
            raise FileNotFoundError(f"No accuchek_*.json in {self._paths.root}")
        return files[0]

    def load_samples(self, path: Path) -> list[Sample]:
        """Parse Accu-Chek JSON into samples sorted by time.

        Raises:
            ValueError: If JSON shape is invalid.
        """
        text = path.read_text(encoding="utf-8")
        raw = _extract_json_list(text)
        if not isinstance(raw, list):
            raise ValueError("Accu-Chek JSON must be a list")

        out: list[Sample] = []
        for item in raw:
            sample = _item_to_sample(item, self._tz)
            if sample is not None:
                out.append(sample)
        out.sort(key=lambda s: s.timestamp)
        return out

    def get_samples(self, start: datetime, end: datetime) -> list[Sample]:
        """Return samples of the newest export inside ``[start, end]``."""
        try:
            path = self.newest_json()
            samples = self.load_samples(path)
        except (OSError, TypeError, ValueError) as exc:
            raise SampleSourceError(str(exc)) from exc

        start, end = _aware(start, self._tz), _aware(end, self._tz)
        selected = [s for s in samples if start <= s.timestamp <= end]
        logger.info(
            "%s: %d of %d samples between %s and %s",
            path.name,
            len(selected),
            len(samples),
            start,
            end,
        )
        return selected


def _aware(moment: datetime, zone: tzinfo) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=zone)
    return moment


def _item_to_sample(item: Any, zone: tzinfo) -> Sample | None:
    """Convierte un ítem dict en Sample (mg/dL); None si falta el valor."""
    if not isinstance(item, dict):
        return None
    mg_dl = item.get("mg/dL")
    mmol_l = item.get("mmol/L")
    if mg_dl is not None:
        value, unit = float(mg_dl), GlucoseUnit.MG_DL
    elif mmol_l is not None:
        value, unit = float(mmol_l), GlucoseUnit.MMOL_L
    else:
        return None
    ts = _parse_timestamp(item.get("timestamp"), item.get("epoch"), zone)
    return Sample(timestamp=ts, concentration=value, unit=unit)


def _extract_json_list(text: str) -> Any:
    """Extract JSON array from text, tolerating leading non-JSON (e.g. log lines)."""
    start = text.find("[")
    if start >= 0:
        return json.loads(text[start:])
    return json.loads(text)


def _parse_timestamp(ts_str: Any, epoch: Any, zone: tzinfo) -> datetime:
    if isinstance(ts_str, str) and ts_str.strip():
        dt = datetime.strptime(ts_str, "%Y/%m/%d %H:%M")
        return dt.replace(tzinfo=zone)

    if epoch is not None:
        return datetime.fromtimestamp(int(epoch), tz=zone)

    raise ValueError("Missing timestamp and epoch")
