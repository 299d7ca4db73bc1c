"""Render an AnalysisResult as plain text."""

from __future__ import annotations

from typing import List

from mapmerge.common.models import AnalysisResult, MergedRecord

TITLE = "=== Map Data Analysis Results ==="


def render_report(result: AnalysisResult) -> str:
    lines: List[str] = [TITLE, ""]

    lines.append("1. Count of Valid Points per Type:")
    for record_type in _sorted_types(result.type_count):
        lines.append(f"{record_type}: {result.type_count[record_type]}")
    lines.append("")

    lines.append("2. Average Rating per Type:")
    for record_type in _sorted_types(result.avg_rating):
        lines.append(f"{record_type}: {result.avg_rating[record_type]:.2f}")
    lines.append("")

    lines.append("3. Location with Highest Number of Reviews:")
    if result.most_reviewed is not None:
        top = result.most_reviewed
        lines.append(f"ID: {top.id}, Type: {top.metadata.type}, Reviews: {top.metadata.reviews}")
    lines.append("")

    lines.append("4. Locations with Incomplete Data:")
    if not result.incomplete:
        lines.append("No incomplete data found.")
    else:
        lines.extend(describe_incomplete(record) for record in result.incomplete)

    return "\n".join(lines) + "\n"


def describe_incomplete(record: MergedRecord) -> str:
    text = f"ID: {record.id}"
    if record.missing_location:
        text += " (missing location data)"
    if record.missing_metadata:
        text += " (missing metadata)"
    return text


def _sorted_types(mapping) -> List:
    # A JSON record without a type groups under None.
    return sorted(mapping, key=lambda key: (key is None, key or ""))
