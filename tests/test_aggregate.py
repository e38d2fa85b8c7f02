import pytest

from auditpivot.aggregate import PivotAggregator
from auditpivot.errors import AggregatorFrozenError
from auditpivot.schemas import AuditRecord


def _record(ts, actor=None, command=None):
    values = {}
    if actor is not None:
        values["actor"] = actor
    if command is not None:
        values["command"] = command
    return AuditRecord(timestamp=ts, dim_values=values)


def test_ingest_counts_composite_keys():
    agg = PivotAggregator(["actor", "command"])
    agg.ingest(_record("2024-01-01 00:00:01", "alice", "open"))
    agg.ingest(_record("2024-01-01 00:00:01", "alice", "open"))
    agg.ingest(_record("2024-01-01 00:00:02", "bob", "open"))
    assert agg.count("actor", "2024-01-01 00:00:01", "alice") == 2
    assert agg.count("actor", "2024-01-01 00:00:02", "alice") == 0
    assert agg.count("command", "2024-01-01 00:00:01", "open") == 2
    assert agg.records_ingested == 3


def test_columns_are_global_and_sorted():
    agg = PivotAggregator(["actor", "command"])
    agg.ingest(_record("2024-01-01 00:00:02", "carol", "mkdirs"))
    agg.ingest(_record("2024-01-01 00:00:01", "Bob", "open"))
    agg.ingest(_record("2024-01-01 00:00:01", "alice", "open"))
    assert agg.columns("actor") == ["Bob", "alice", "carol"]
    assert agg.columns("command") == ["mkdirs", "open"]
    assert agg.timestamps("actor") == ["2024-01-01 00:00:01", "2024-01-01 00:00:02"]


def test_missing_value_counts_as_empty_column():
    agg = PivotAggregator(["actor", "command"])
    agg.ingest(_record("2024-01-01 00:00:01", actor="alice"))
    agg.ingest(_record("2024-01-01 00:00:01", actor="", command=""))
    assert agg.columns("command") == [""]
    assert agg.count("command", "2024-01-01 00:00:01", "") == 2
    assert agg.count("actor", "2024-01-01 00:00:01", "alice") == 1
    assert agg.total("actor") == agg.total("command") == 2


def test_ingest_after_freeze_fails():
    agg = PivotAggregator(["actor"])
    agg.ingest(_record("2024-01-01 00:00:01", "alice"))
    agg.freeze()
    with pytest.raises(AggregatorFrozenError):
        agg.ingest(_record("2024-01-01 00:00:01", "alice"))
    assert agg.total("actor") == 1


def test_dimension_list_is_validated():
    with pytest.raises(ValueError):
        PivotAggregator([])
    with pytest.raises(ValueError):
        PivotAggregator(["actor", "actor"])
