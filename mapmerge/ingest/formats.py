"""Input encodings understood by the record parsers."""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class UnsupportedFormatError(ValueError):
    """Raised before parsing when a source has no recognised encoding."""


class InputFormat(str, Enum):
    JSON = "json"
    CSV = "csv"

    @classmethod
    def parse(cls, value: "str | InputFormat") -> "InputFormat":
        """Resolve an explicit format tag such as ``"csv"``."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedFormatError(f"Unsupported file format: {value}") from None

    @classmethod
    def from_path(cls, path: str | Path) -> "InputFormat":
        """Infer the format from a filename extension."""

        suffix = Path(path).suffix.lower().lstrip(".")
        for fmt in cls:
            if fmt.value == suffix:
                return fmt
        raise UnsupportedFormatError(f"Unsupported file format for: {path}")


def resolve_format(path: str | Path, explicit: str | InputFormat | None = None) -> InputFormat:
    if explicit:
        return InputFormat.parse(explicit)
    return InputFormat.from_path(path)
