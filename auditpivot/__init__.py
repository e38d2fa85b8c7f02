"""Pivot-table reports over out-of-order audit log lines."""

from .aggregate import PivotAggregator  # noqa: F401
from .config import DimensionSpec, PivotConfig, default_config, load_config  # noqa: F401
from .extract import build_extractor  # noqa: F401
from .render import render, render_reports, write_reports  # noqa: F401
from .session import AggregationSession  # noqa: F401
