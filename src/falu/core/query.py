"""
Query-string helpers for list operations.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

__all__ = [
    "ListOptions",
    "QueryValues",
    "RangeFilter",
    "make_query_string",
]


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


class QueryValues(dict):
    """
    Accumulates query parameters, skipping ``None`` values.

    Sequences are repeated under the same key.
    """

    def add(self, key: str, value: Any) -> "QueryValues":
        if value is None:
            return self
        if isinstance(value, (list, tuple, set, frozenset)):
            items = [_format_value(item) for item in value if item is not None]
            if items:
                self[key] = sorted(items) if isinstance(value, (set, frozenset)) else items
            return self
        self[key] = _format_value(value)
        return self

    def add_range(self, key: str, value: Optional["RangeFilter"]) -> "QueryValues":
        if value is not None:
            value.populate(key, self)
        return self


def make_query_string(values: Mapping[str, Any]) -> str:
    """
    Build a ``?key=value`` suffix, or an empty string when there is nothing to add.

    Keys are emitted in sorted order so the same options always produce the
    same URL.
    """
    pairs: list = []
    for key in sorted(values):
        value = values[key]
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _format_value(item)) for item in value)
        else:
            pairs.append((key, _format_value(value)))
    if not pairs:
        return ""
    return "?" + urlencode(pairs)


@dataclass(frozen=True)
class RangeFilter:
    """Comparison filter such as ``created.gte=2022-01-01``."""

    lt: Any = None
    lte: Any = None
    gt: Any = None
    gte: Any = None

    def populate(self, key: str, values: QueryValues) -> None:
        for op in ("lt", "lte", "gt", "gte"):
            values.add(f"{key}.{op}", getattr(self, op))


@dataclass(frozen=True)
class ListOptions:
    """
    Pagination and sorting shared by every list operation.

    ``continuation_token`` is the opaque value returned by a previous page.
    """

    sorting: Optional[str] = None
    count: Optional[int] = None
    continuation_token: Optional[str] = None
    created: Optional[RangeFilter] = None
    updated: Optional[RangeFilter] = None

    def __post_init__(self) -> None:
        if self.count is not None and self.count < 1:
            raise ValueError("'count' must be greater than zero")
        if self.sorting is not None and self.sorting not in ("asc", "desc"):
            raise ValueError("'sorting' must be either 'asc' or 'desc'")

    def populate_query_values(self, values: QueryValues) -> None:
        values.add("sort", self.sorting)
        values.add("count", self.count)
        values.add("ct", self.continuation_token)
        values.add_range("created", self.created)
        values.add_range("updated", self.updated)

    def to_query(self) -> Dict[str, Any]:
        values = QueryValues()
        self.populate_query_values(values)
        return dict(values)
