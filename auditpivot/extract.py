"""Record extraction for space- and tab-delimited audit log lines.

Reference line (tab grammar)::

    2024-01-01 00:00:01,123 INFO FSNamesystem.audit: allowed=true<TAB>ugi=alice (auth:SIMPLE)<TAB>ip=/10.0.0.1<TAB>cmd=open<TAB>...

The space grammar is the same line with single spaces between the fields.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence, Type

from .config import DimensionSpec, PivotConfig
from .errors import LineRejected
from .schemas import AuditRecord

_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$", re.ASCII)
_SUBSECOND_RE = re.compile(r"[,.]")
# everything from the first auth annotation on, e.g. " (auth:PROXY) via hdfs (auth:KERBEROS)"
_AUTH_SUFFIX_RE = re.compile(r"\s*\(auth:.*$", re.S)


class RecordExtractor(ABC):
    """Turn one raw line into an ``AuditRecord`` or raise ``LineRejected``."""

    grammar = ""

    def __init__(self, dimensions: Sequence[DimensionSpec], *, strip_auth_suffix: bool = True) -> None:
        self.dimensions = list(dimensions)
        self.strip_auth_suffix = strip_auth_suffix

    def extract(self, raw_line: str) -> AuditRecord:
        line = raw_line.rstrip("\r\n")
        if not line.strip():
            raise LineRejected("blank line", line)
        parts = line.split(None, 2)
        if len(parts) < 3:
            raise LineRejected("missing timestamp or audit payload", line)
        timestamp = normalize_timestamp(parts[0], parts[1])
        if timestamp is None:
            raise LineRejected(f"unrecognized timestamp '{parts[0]} {parts[1]}'", line)
        fields = self.parse_fields(parts[2])
        if not fields:
            raise LineRejected("no key=value fields", line)
        dim_values: Dict[str, str] = {}
        for spec in self.dimensions:
            if spec.key in fields:
                dim_values[spec.name] = self._clean_value(fields[spec.key])
        return AuditRecord(timestamp=timestamp, dim_values=dim_values)

    def extract_or_none(self, raw_line: str) -> Optional[AuditRecord]:
        try:
            return self.extract(raw_line)
        except LineRejected:
            return None

    @abstractmethod
    def parse_fields(self, payload: str) -> Dict[str, str]:
        """Map each field key of the payload to its raw value."""

    def _clean_value(self, value: str) -> str:
        if self.strip_auth_suffix:
            value = _AUTH_SUFFIX_RE.sub("", value)
        return value.strip()


class SpaceDelimitedExtractor(RecordExtractor):
    """Fields are whitespace-separated ``key=value`` tokens; values hold no spaces."""

    grammar = "space"

    def parse_fields(self, payload: str) -> Dict[str, str]:
        fields: Dict[str, str] = {}
        for token in payload.split():
            key, sep, value = token.partition("=")
            if not sep or not key:
                continue
            fields.setdefault(key, value)
        return fields


class TabDelimitedExtractor(RecordExtractor):
    """Fields are tab-separated; a value may contain spaces.

    The first segment still carries the level and logger name in front of the
    first field (``INFO FSNamesystem.audit: allowed=true``), so the key is the
    last word before ``=``.
    """

    grammar = "tab"

    def parse_fields(self, payload: str) -> Dict[str, str]:
        fields: Dict[str, str] = {}
        for segment in payload.split("\t"):
            head, sep, value = segment.partition("=")
            words = head.split()
            if not sep or not words:
                continue
            fields.setdefault(words[-1], value.strip())
        return fields


GRAMMARS: Dict[str, Type[RecordExtractor]] = {
    SpaceDelimitedExtractor.grammar: SpaceDelimitedExtractor,
    TabDelimitedExtractor.grammar: TabDelimitedExtractor,
}


def build_extractor(config: PivotConfig) -> RecordExtractor:
    extractor_cls = GRAMMARS[config.grammar]
    return extractor_cls(config.dimensions, strip_auth_suffix=config.strip_auth_suffix)


def normalize_timestamp(date_part: str, time_part: str) -> Optional[str]:
    """Drop sub-second precision; ``None`` when the result is not ``YYYY-MM-DD HH:MM:SS``."""
    seconds = _SUBSECOND_RE.split(time_part, maxsplit=1)[0]
    timestamp = f"{date_part} {seconds}"
    if not _TIMESTAMP_RE.match(timestamp):
        return None
    return timestamp
