"""Turn raw JSON/CSV text into Location and Metadata records.

Parsers never raise on bad data. A JSON payload that cannot be decoded yields
an empty list; a CSV row that cannot be converted is dropped. Both cases are
reported on the supplied logger at WARNING level.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, List, Optional

from mapmerge.common.models import Location, Metadata
from mapmerge.ingest.formats import InputFormat

logger = logging.getLogger(__name__)

LOCATION_FIELDS = 3
METADATA_FIELDS = 4
INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1

_DECIMAL = re.compile(r"[+-]?(NaN|Infinity|(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?)[fFdD]?", re.ASCII)
_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)


def parse_json_locations(content: Optional[str], log: Optional[logging.Logger] = None) -> List[Location]:
    return _parse_json(content, _location_from_item, "locations", log or logger)


def parse_json_metadata(content: Optional[str], log: Optional[logging.Logger] = None) -> List[Metadata]:
    return _parse_json(content, _metadata_from_item, "metadata", log or logger)


def parse_csv_locations(content: Optional[str], log: Optional[logging.Logger] = None) -> List[Location]:
    log = log or logger
    locations: List[Location] = []
    for line, parts in _csv_rows(content, LOCATION_FIELDS):
        record_id = parts[0]
        if not record_id:
            log.warning("Skipping CSV location line with empty ID: %s", line)
            continue
        try:
            locations.append(Location(record_id, _csv_float(parts[1]), _csv_float(parts[2])))
        except ValueError:
            log.warning("Error parsing CSV location line: %s", line)
    return locations


def parse_csv_metadata(content: Optional[str], log: Optional[logging.Logger] = None) -> List[Metadata]:
    log = log or logger
    metadata: List[Metadata] = []
    for line, parts in _csv_rows(content, METADATA_FIELDS):
        record_id = parts[0]
        if not record_id:
            log.warning("Skipping CSV metadata line with empty ID: %s", line)
            continue
        try:
            metadata.append(Metadata(record_id, parts[1], _csv_float(parts[2]), _csv_int(parts[3])))
        except ValueError:
            log.warning("Error parsing CSV metadata line: %s", line)
    return metadata


LOCATION_PARSERS: Dict[InputFormat, Callable[..., List[Location]]] = {
    InputFormat.JSON: parse_json_locations,
    InputFormat.CSV: parse_csv_locations,
}

METADATA_PARSERS: Dict[InputFormat, Callable[..., List[Metadata]]] = {
    InputFormat.JSON: parse_json_metadata,
    InputFormat.CSV: parse_csv_metadata,
}


def parse_locations(content: Optional[str], fmt: InputFormat, log: Optional[logging.Logger] = None) -> List[Location]:
    return LOCATION_PARSERS[InputFormat.parse(fmt)](content, log)


def parse_metadata(content: Optional[str], fmt: InputFormat, log: Optional[logging.Logger] = None) -> List[Metadata]:
    return METADATA_PARSERS[InputFormat.parse(fmt)](content, log)


def _csv_rows(content: Optional[str], min_fields: int):
    """Yield ``(line, trimmed_fields)`` for data rows with enough fields.

    The header line is discarded, blank lines and short rows are skipped
    without a diagnostic.
    """

    if not content:
        return
    for raw_line in content.split("\n")[1:]:
        line = raw_line.strip()
        if not line:
            continue
        parts = line.split(",")
        # Trailing empty fields do not count towards the minimum.
        while parts and parts[-1] == "":
            parts.pop()
        if len(parts) < min_fields:
            continue
        yield line, [part.strip() for part in parts]


def _parse_json(content: Optional[str], convert, label: str, log: logging.Logger) -> list:
    if content is None or not content.strip():
        log.warning("Empty %s JSON payload, treating as no records", label)
        return []
    try:
        items = json.loads(content)
        if items is None:
            return []
        if not isinstance(items, list):
            raise TypeError(f"expected a JSON array, got {type(items).__name__}")
        return [convert(item) for item in items]
    except (ValueError, TypeError, RecursionError) as exc:
        log.warning("Error parsing %s JSON: %s: %s", label, type(exc).__name__, exc)
        return []


def _location_from_item(item: Any) -> Location:
    item = _require_object(item)
    return Location(
        id=_as_id(item.get("id")),
        latitude=_as_float(item.get("latitude")),
        longitude=_as_float(item.get("longitude")),
    )


def _metadata_from_item(item: Any) -> Metadata:
    item = _require_object(item)
    record_type = item.get("type")
    return Metadata(
        id=_as_id(item.get("id")),
        type=None if record_type is None else str(record_type),
        rating=_as_float(item.get("rating")),
        reviews=_as_int(item.get("reviews")),
    )


def _require_object(item: Any) -> dict:
    if not isinstance(item, dict):
        raise TypeError(f"expected a JSON object, got {type(item).__name__}")
    return item


def _as_id(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (dict, list, bool)):
        raise TypeError(f"invalid id value: {value!r}")
    return str(value)


def _as_float(value: Any) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise TypeError(f"invalid number: {value!r}")
    return float(value)


def _as_int(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        raise TypeError(f"invalid integer: {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"invalid integer: {value!r}")
        return int(value)
    return int(value)


def _csv_float(text: str) -> float:
    """Decimal notation only: no digit separators, no lowercase inf/nan."""

    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"invalid number: {text!r}")
    return float(text.rstrip("fFdD"))


def _csv_int(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not INT32_MIN <= value <= INT32_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value
