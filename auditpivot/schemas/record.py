"""Schemas for extracted audit records and run statistics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class AuditRecord(BaseModel):
    """One accepted audit event, already normalized by an extractor."""

    model_config = ConfigDict(frozen=True)

    timestamp: str
    dim_values: Dict[str, str] = Field(default_factory=dict)


@dataclass
class RunStats:
    lines: int = 0
    accepted: int = 0
    rejected: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return {"lines": self.lines, "accepted": self.accepted, "rejected": self.rejected}
