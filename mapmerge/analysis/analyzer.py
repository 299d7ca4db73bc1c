"""Spark aggregations over the merged records."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from pyspark import RDD
from pyspark.sql import DataFrame, Row, SparkSession
from pyspark.sql import functions as F

from mapmerge.common.models import AnalysisResult, MergedRecord


class Analyzer:
    """Counts, averages and picks the most-reviewed point among complete records.

    Only records carrying both a location and metadata are aggregated; the rest
    are returned as ``incomplete``, ordered by id. Ties on review count go to
    the lexicographically smallest id so the pick does not depend on how the
    merged records happen to be partitioned.
    """

    def __init__(self, spark: SparkSession) -> None:
        self.spark = spark

    def run(self, merged_rdd: RDD) -> AnalysisResult:
        owns_cache = not merged_rdd.is_cached
        merged_rdd = merged_rdd.cache()
        complete = merged_rdd.filter(lambda record: record.is_complete).cache()

        try:
            type_count, avg_rating = self._type_maps(self._type_summary(complete))
            return AnalysisResult(
                type_count=type_count,
                avg_rating=avg_rating,
                most_reviewed=self._most_reviewed(complete),
                incomplete=self._incomplete(merged_rdd),
            )
        finally:
            complete.unpersist()
            if owns_cache:
                merged_rdd.unpersist()

    def type_summary(self, merged_rdd: RDD) -> DataFrame:
        """Per-type point count and mean rating over complete records."""

        return self._type_summary(merged_rdd.filter(lambda record: record.is_complete))

    def _type_summary(self, complete: RDD) -> DataFrame:
        rows = complete.map(
            lambda record: Row(
                type=record.metadata.type,
                rating=float(record.metadata.rating),
            )
        )
        frame = self.spark.createDataFrame(rows, schema="type string, rating double")
        return (
            frame.groupBy("type")
            .agg(F.count("*").alias("point_count"), F.avg("rating").alias("avg_rating"))
            .select("type", "point_count", "avg_rating")
        )

    @staticmethod
    def _type_maps(summary: DataFrame) -> Tuple[Dict[str, int], Dict[str, float]]:
        type_count: Dict[str, int] = {}
        avg_rating: Dict[str, float] = {}
        for row in summary.collect():
            type_count[row["type"]] = int(row["point_count"])
            avg_rating[row["type"]] = float(row["avg_rating"])
        return type_count, avg_rating

    @staticmethod
    def _most_reviewed(complete: RDD) -> Optional[MergedRecord]:
        top = complete.takeOrdered(1, key=_review_rank)
        return top[0] if top else None

    @staticmethod
    def _incomplete(merged_rdd: RDD) -> Tuple[MergedRecord, ...]:
        missing = merged_rdd.filter(lambda record: not record.is_complete)
        return tuple(missing.sortBy(lambda record: record.id).collect())


def _review_rank(record: MergedRecord) -> Tuple[int, str]:
    return (-record.metadata.reviews, record.id)
