"""Load location and metadata files into record lists."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from mapmerge.common.config import DatasetConfig
from mapmerge.common.models import Location, Metadata
from mapmerge.ingest.formats import InputFormat, resolve_format
from mapmerge.ingest.parsers import parse_locations, parse_metadata

logger = logging.getLogger(__name__)


class IngestionService:
    """Reads both input files whole and hands the text to the parsers."""

    def __init__(
        self,
        locations_path: str,
        metadata_path: str,
        locations_format: Optional[str] = None,
        metadata_format: Optional[str] = None,
    ) -> None:
        self.locations_path = locations_path
        self.metadata_path = metadata_path
        self.locations_format = locations_format
        self.metadata_format = metadata_format

    @classmethod
    def from_config(cls, dataset: DatasetConfig) -> "IngestionService":
        return cls(
            dataset.locations_path,
            dataset.metadata_path,
            locations_format=dataset.locations_format,
            metadata_format=dataset.metadata_format,
        )

    def resolve_formats(self) -> Tuple[InputFormat, InputFormat]:
        """Fail fast on an unsupported encoding for either source."""

        return (
            resolve_format(self.locations_path, self.locations_format),
            resolve_format(self.metadata_path, self.metadata_format),
        )

    def load(self) -> Tuple[List[Location], List[Metadata]]:
        locations_fmt, metadata_fmt = self.resolve_formats()
        logger.info("Using locations file: %s", self.locations_path)
        logger.info("Using metadata file: %s", self.metadata_path)

        locations = self.load_locations(locations_fmt)
        metadata = self.load_metadata(metadata_fmt)
        return locations, metadata

    def load_locations(self, fmt: Optional[InputFormat] = None) -> List[Location]:
        fmt = fmt or resolve_format(self.locations_path, self.locations_format)
        locations = parse_locations(_read_text(self.locations_path), fmt)
        logger.info("Loaded %d locations", len(locations))
        return locations

    def load_metadata(self, fmt: Optional[InputFormat] = None) -> List[Metadata]:
        fmt = fmt or resolve_format(self.metadata_path, self.metadata_format)
        metadata = parse_metadata(_read_text(self.metadata_path), fmt)
        logger.info("Loaded %d metadata entries", len(metadata))
        return metadata


def _read_text(path: str) -> str:
    # A leading BOM is dropped and undecodable bytes become U+FFFD.
    return Path(path).read_text(encoding="utf-8-sig", errors="replace")
