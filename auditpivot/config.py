"""Helpers for loading pivot report configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError


class DimensionSpec(BaseModel):
    """A report dimension and the audit field (``key=value``) it is read from."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    key: str = Field(min_length=1)


def _default_dimensions() -> List[DimensionSpec]:
    return [DimensionSpec(name="actor", key="ugi"), DimensionSpec(name="command", key="cmd")]


class PivotConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    grammar: Literal["space", "tab"] = "tab"
    strip_auth_suffix: bool = True
    dimensions: List[DimensionSpec] = Field(default_factory=_default_dimensions)

    @field_validator("dimensions")
    @classmethod
    def _check_dimensions(cls, value: List[DimensionSpec]) -> List[DimensionSpec]:
        if not value:
            raise ValueError("at least one dimension is required")
        names = [spec.name for spec in value]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate dimension names: {', '.join(duplicates)}")
        return value

    @property
    def dimension_names(self) -> List[str]:
        return [spec.name for spec in self.dimensions]


def default_config() -> PivotConfig:
    """Actor (``ugi``) and command (``cmd``) reports over tab-delimited lines."""
    return PivotConfig()


def load_config(path: str | Path) -> PivotConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Pivot config not found: {config_path}")
    try:
        with config_path.open("r", encoding="utf-8") as fin:
            payload = yaml.safe_load(fin) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Pivot config must be a mapping: {config_path}")
    return _validate(payload, source=str(config_path))


def apply_overrides(config: PivotConfig, *, grammar: Optional[str] = None) -> PivotConfig:
    """Return a copy of ``config`` with command-line overrides applied."""
    if grammar is None:
        return config
    payload = config.model_dump()
    payload["grammar"] = grammar
    return _validate(payload, source="--grammar")


def _validate(payload: Dict[str, Any], *, source: str) -> PivotConfig:
    try:
        return PivotConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid pivot config ({source}): {exc}") from exc
