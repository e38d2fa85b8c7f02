"""One batch run: read every line, then render every report."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, TextIO

from rich.console import Console

from .aggregate import PivotAggregator
from .config import PivotConfig, default_config
from .errors import InputReadError, LineRejected
from .extract import build_extractor
from .render import render_reports, write_reports
from .schemas import RunStats

console = Console(stderr=True)


class AggregationSession:
    """Own the extractor and aggregator for a single run."""

    def __init__(self, config: Optional[PivotConfig] = None, *, verbose: bool = False) -> None:
        self.config = config or default_config()
        self.extractor = build_extractor(self.config)
        self.aggregator = PivotAggregator(self.config.dimension_names)
        self.stats = RunStats()
        self.verbose = verbose

    def feed(self, lines: Iterable[str], *, source: str = "<stdin>") -> int:
        """Ingest every accepted line from ``lines``; return how many were accepted."""
        accepted = 0
        line_no = 0
        try:
            for line_no, line in enumerate(lines, start=1):
                self.stats.lines += 1
                try:
                    record = self.extractor.extract(line)
                except LineRejected as exc:
                    self.stats.rejected += 1
                    if self.verbose:
                        console.log(f"[yellow]Rejected line[/] {source}:{line_no} ({exc.reason})")
                    continue
                self.aggregator.ingest(record)
                self.stats.accepted += 1
                accepted += 1
        except OSError as exc:
            raise InputReadError(f"Failed reading {source} after line {line_no}: {exc}") from exc
        return accepted

    def feed_path(self, path: Path) -> int:
        try:
            fin = path.open("r", encoding="utf-8", errors="replace")
        except OSError as exc:
            raise InputReadError(f"Cannot open {path}: {exc}") from exc
        with fin:
            return self.feed(fin, source=str(path))

    def render(self) -> List[str]:
        return render_reports(self.aggregator)

    def write(self, stream: TextIO) -> int:
        return write_reports(self.aggregator, stream)

    def summary(self) -> Dict[str, Any]:
        dimensions = {
            dim: {
                "columns": len(self.aggregator.columns(dim)),
                "rows": len(self.aggregator.timestamps(dim)),
                "total": self.aggregator.total(dim),
            }
            for dim in self.aggregator.dimensions
        }
        return {**self.stats.as_dict(), "grammar": self.config.grammar, "dimensions": dimensions}

    def log_summary(self) -> None:
        summary = self.summary()
        console.log(
            f"[cyan]AuditPivot[/] grammar={summary['grammar']} lines={summary['lines']} "
            f"accepted={summary['accepted']} rejected={summary['rejected']}"
        )
        for dim, info in summary["dimensions"].items():
            console.log(f"[cyan]AuditPivot[/] {dim}: {info['columns']} columns, {info['rows']} rows")
