from mapmerge.analysis.analyzer import Analyzer
from mapmerge.common.models import Location, Metadata, MergedRecord


def _complete(record_id: str, record_type: str, rating: float, reviews: int) -> MergedRecord:
    return MergedRecord(
        id=record_id,
        location=Location(record_id, 1.0, 2.0),
        metadata=Metadata(record_id, record_type, rating, reviews),
    )


def test_type_counts_and_average_rating(spark):
    records = [
        _complete("p1", "park", 4.0, 1),
        _complete("p2", "park", 5.0, 2),
        _complete("p3", "park", 3.0, 3),
        _complete("c1", "cafe", 2.5, 4),
        MergedRecord("p4", metadata=Metadata("p4", "park", 0.0, 999)),
    ]

    result = Analyzer(spark).run(spark.sparkContext.parallelize(records))

    assert result.type_count == {"park": 3, "cafe": 1}
    assert abs(result.avg_rating["park"] - 4.0) < 1e-9
    assert abs(result.avg_rating["cafe"] - 2.5) < 1e-9


def test_most_reviewed_ties_resolve_to_smallest_id(spark):
    records = [
        _complete("m", "park", 4.0, 25),
        _complete("k", "cafe", 4.0, 10),
        _complete("b", "bar", 4.0, 25),
        MergedRecord("a", metadata=Metadata("a", "bar", 4.0, 500)),
    ]
    analyzer = Analyzer(spark)

    forward = analyzer.run(spark.sparkContext.parallelize(records, 3))
    backward = analyzer.run(spark.sparkContext.parallelize(list(reversed(records)), 2))

    assert forward.most_reviewed.id == "b"
    assert backward.most_reviewed.id == "b"


def test_no_complete_records(spark):
    records = [
        MergedRecord("z", location=Location("z", 0.0, 0.0)),
        MergedRecord("a", metadata=Metadata("a", "park", 3.0, 7)),
    ]

    result = Analyzer(spark).run(spark.sparkContext.parallelize(records))

    assert result.type_count == {}
    assert result.avg_rating == {}
    assert result.most_reviewed is None
    assert [record.id for record in result.incomplete] == ["a", "z"]


def test_type_summary_frame(spark):
    records = [
        _complete("p1", "park", 4.0, 1),
        _complete("p2", "park", 2.0, 2),
        MergedRecord("x", location=Location("x", 0.0, 0.0)),
    ]

    summary = Analyzer(spark).type_summary(spark.sparkContext.parallelize(records)).toPandas()

    park = summary[summary["type"] == "park"].iloc[0]
    assert len(summary) == 1
    assert park["point_count"] == 2
    assert abs(park["avg_rating"] - 3.0) < 1e-6


def test_run_releases_its_cached_rdds(spark):
    records = spark.sparkContext.parallelize([_complete("p1", "park", 4.0, 1)])
    already_cached = spark.sparkContext.parallelize([_complete("p2", "cafe", 3.0, 2)]).cache()
    analyzer = Analyzer(spark)

    analyzer.run(records)
    analyzer.run(already_cached)

    assert not records.is_cached
    assert already_cached.is_cached
