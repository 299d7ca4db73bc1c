"""Dataclasses shared between the ingestion and analysis layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Location:
    id: Optional[str]
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Metadata:
    id: Optional[str]
    type: Optional[str]
    rating: float
    reviews: int


@dataclass(frozen=True)
class MergedRecord:
    """One row of the outer join: either side may be absent."""

    id: str
    location: Optional[Location] = None
    metadata: Optional[Metadata] = None

    @property
    def is_complete(self) -> bool:
        return self.location is not None and self.metadata is not None

    @property
    def missing_location(self) -> bool:
        return self.location is None

    @property
    def missing_metadata(self) -> bool:
        return self.metadata is None


@dataclass(frozen=True)
class AnalysisResult:
    """Aggregates computed over the complete records plus the incomplete ones."""

    type_count: Dict[str, int]
    avg_rating: Dict[str, float]
    most_reviewed: Optional[MergedRecord]
    incomplete: Tuple[MergedRecord, ...]
