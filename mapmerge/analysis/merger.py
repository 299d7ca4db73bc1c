"""Full outer join of location and metadata records keyed by id."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple, TypeVar

from pyspark import RDD
from pyspark.sql import SparkSession

from mapmerge.common.models import Location, Metadata, MergedRecord

R = TypeVar("R", Location, Metadata)


class Merger:
    """Builds one MergedRecord per distinct non-empty id seen on either side."""

    def __init__(self, spark: SparkSession) -> None:
        self.spark = spark

    def merge(self, locations: Sequence[Location], metadata: Sequence[Metadata]) -> RDD:
        """Return an RDD of MergedRecord. Ordering is not defined."""

        location_pairs = self.first_occurrence_pairs(locations)
        metadata_pairs = self.first_occurrence_pairs(metadata)

        joined = location_pairs.fullOuterJoin(metadata_pairs)
        return joined.map(_to_merged_from_join)

    def merge_records(self, locations: Sequence[Location], metadata: Sequence[Metadata]) -> List[MergedRecord]:
        return self.merge(locations, metadata).collect()

    def first_occurrence_pairs(self, records: Sequence[R]) -> RDD:
        """Key records by id, keeping the earliest record for each id.

        Records without an id never enter the join.
        """

        indexed = self.spark.sparkContext.parallelize(list(enumerate(records)))
        keyed = indexed.filter(lambda item: bool(item[1].id)).map(
            lambda item: (item[1].id, item)
        )
        earliest = keyed.reduceByKey(_earlier)
        return earliest.mapValues(lambda item: item[1])

    def first_occurrences(self, records: Sequence[R]) -> Dict[str, R]:
        return self.first_occurrence_pairs(records).collectAsMap()


def _earlier(a: Tuple[int, R], b: Tuple[int, R]) -> Tuple[int, R]:
    return a if a[0] <= b[0] else b


def _to_merged_from_join(item: Tuple[str, Tuple[Optional[Location], Optional[Metadata]]]) -> MergedRecord:
    record_id, (location, metadata) = item
    return MergedRecord(id=record_id, location=location, metadata=metadata)

