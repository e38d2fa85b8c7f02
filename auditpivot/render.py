"""Dense tab-separated pivot reports."""

from __future__ import annotations

from typing import List, TextIO

from .aggregate import PivotAggregator

FIELD_SEP = "\t"
HEADER_LABEL = "Timestamp"


def render(aggregator: PivotAggregator, dimension: str) -> List[str]:
    """Header plus one zero-filled row per timestamp, both sorted by codepoint."""
    aggregator.freeze()
    columns = aggregator.columns(dimension)
    lines = [FIELD_SEP.join([HEADER_LABEL, *columns])]
    for timestamp in aggregator.timestamps(dimension):
        counts = [str(aggregator.count(dimension, timestamp, column)) for column in columns]
        lines.append(FIELD_SEP.join([timestamp, *counts]))
    return lines


def render_reports(aggregator: PivotAggregator) -> List[str]:
    lines: List[str] = []
    for idx, dimension in enumerate(aggregator.dimensions):
        if idx:
            lines.append("")
        lines.extend(render(aggregator, dimension))
    return lines


def write_reports(aggregator: PivotAggregator, stream: TextIO) -> int:
    lines = render_reports(aggregator)
    for line in lines:
        stream.write(line + "\n")
    return len(lines)
