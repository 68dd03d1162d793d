"""Punto de entrada: ``python -m glucostats``."""

from __future__ import annotations

from glucostats.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
