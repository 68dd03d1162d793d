"""Clases base para fuentes de muestras de glucosa."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from glucostats.model import Sample


class SampleSourceError(Exception):
    """The sample source could not deliver samples for a period."""


@dataclass(frozen=True)
class SourcePaths:
    """Container for source directories."""

    root: Path


class SampleSource(ABC):
    """Abstract sample source."""

    @abstractmethod
    def validate(self) -> None:
        """Validate that the source is reachable.

        Raises:
            SampleSourceError: If the source cannot be used.
        """

    @abstractmethod
    def get_samples(self, start: datetime, end: datetime) -> list[Sample]:
        """Return samples with ``start <= timestamp <= end``.

        Order is not guaranteed.

        Raises:
            SampleSourceError: If samples cannot be read.
        """
