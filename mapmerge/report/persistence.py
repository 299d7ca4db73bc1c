"""Persist the rendered report."""

from __future__ import annotations

from pathlib import Path


class Persistence:
    """Write report text into an output folder."""

    def __init__(self, base_path: str) -> None:
        self.base_path = Path(base_path)

    def write_report(self, text: str, name: str = "report.txt") -> Path:
        target = self.base_path / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        return target
