"""Incremental (timestamp, value) counting per report dimension."""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence, Set, Tuple

from .errors import AggregatorFrozenError
from .schemas import AuditRecord


class PivotAggregator:
    """Count tables and column registries for a fixed list of dimensions.

    Each dimension gets a ``Counter`` keyed by ``(timestamp, value)`` and a set
    of every value seen across the whole input. Both only grow; once rendering
    has started the aggregator is frozen and further ``ingest`` calls fail.
    """

    def __init__(self, dimensions: Sequence[str]) -> None:
        if not dimensions:
            raise ValueError("PivotAggregator needs at least one dimension")
        if len(set(dimensions)) != len(dimensions):
            raise ValueError(f"Duplicate dimensions: {list(dimensions)}")
        self.dimensions: Tuple[str, ...] = tuple(dimensions)
        self._counts: Dict[str, Counter] = {dim: Counter() for dim in self.dimensions}
        self._columns: Dict[str, Set[str]] = {dim: set() for dim in self.dimensions}
        self.records_ingested = 0
        self.frozen = False

    def ingest(self, record: AuditRecord) -> None:
        if self.frozen:
            raise AggregatorFrozenError("Cannot ingest records after rendering has started")
        for dim in self.dimensions:
            # absent and empty values share the "" column
            value = record.dim_values.get(dim, "")
            self._counts[dim][(record.timestamp, value)] += 1
            self._columns[dim].add(value)
        self.records_ingested += 1

    def freeze(self) -> None:
        self.frozen = True

    def count(self, dimension: str, timestamp: str, value: str) -> int:
        return self._counts[dimension].get((timestamp, value), 0)

    def columns(self, dimension: str) -> List[str]:
        return sorted(self._columns[dimension])

    def timestamps(self, dimension: str) -> List[str]:
        return sorted({timestamp for timestamp, _ in self._counts[dimension]})

    def total(self, dimension: str) -> int:
        return sum(self._counts[dimension].values())
