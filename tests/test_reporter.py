from mapmerge.common.models import AnalysisResult, Location, Metadata, MergedRecord
from mapmerge.report.persistence import Persistence
from mapmerge.report.reporter import render_report


def _result() -> AnalysisResult:
    top = MergedRecord("p2", Location("p2", 1.0, 1.0), Metadata("p2", "park", 5.0, 40))
    return AnalysisResult(
        type_count={"park": 2, "cafe": 1},
        avg_rating={"park": 4.5, "cafe": 3.333333},
        most_reviewed=top,
        incomplete=(
            MergedRecord("a", location=Location("a", 0.0, 0.0)),
            MergedRecord("b", metadata=Metadata("b", "bar", 1.0, 1)),
        ),
    )


def test_render_report_lists_every_section():
    text = render_report(_result())

    assert text.startswith("=== Map Data Analysis Results ===\n")
    assert "cafe: 1\npark: 2\n" in text
    assert "cafe: 3.33\npark: 4.50\n" in text
    assert "ID: p2, Type: park, Reviews: 40" in text
    assert "ID: a (missing metadata)" in text
    assert "ID: b (missing location data)" in text


def test_render_report_without_incomplete_records():
    result = AnalysisResult(type_count={}, avg_rating={}, most_reviewed=None, incomplete=())

    text = render_report(result)

    assert "No incomplete data found." in text
    assert "Reviews:" not in text


def test_persistence_writes_report(tmp_path):
    target = Persistence(str(tmp_path / "out")).write_report("hello\n")

    assert target == tmp_path / "out" / "report.txt"
    assert target.read_text(encoding="utf-8") == "hello\n"
