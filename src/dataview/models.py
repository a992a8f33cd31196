"""Data-view facing lightweight models.

Column descriptors describe how the engine may look into an otherwise opaque
record; the remaining types are the owned (filter / sort) and derived (page)
state the engine hands to renderers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Tuple, Union

__all__ = [
    "Accessor",
    "FilteringCapability",
    "OrderingCapability",
    "ColumnDescriptor",
    "SortDirection",
    "FilterState",
    "SortState",
    "SlotKind",
    "Slot",
    "Page",
    "SortIndicator",
    "FilterOption",
    "PLACEHOLDER_SLOT",
    "LOADING_SLOT",
    "resolve_accessor",
]

# A callable taking a record, or the name of a field on it.
Accessor = Union[Callable[[Any], Any], str]


def resolve_accessor(accessor: Accessor) -> Callable[[Any], Any]:
    """Return a callable for ``accessor``.

    Strings are looked up as mapping keys on mappings and as attributes on
    everything else; a missing field resolves to ``None``.
    """
    if callable(accessor):
        return accessor
    key = accessor

    def _lookup(record: Any) -> Any:
        if isinstance(record, Mapping):
            return record.get(key)
        return getattr(record, key, None)

    return _lookup


@dataclass(frozen=True)
class FilteringCapability:
    accessor: Accessor

    def value_of(self, record: Any) -> Any:
        return resolve_accessor(self.accessor)(record)


@dataclass(frozen=True)
class OrderingCapability:
    iteratee: Accessor

    def key_of(self, record: Any) -> Any:
        return resolve_accessor(self.iteratee)(record)


@dataclass(frozen=True)
class ColumnDescriptor:
    id: str
    title: str
    filtering: Optional[FilteringCapability] = None
    ordering: Optional[OrderingCapability] = None
    # Only the rendering layer calls this
    render: Callable[[Any], str] = field(default=str, compare=False)

    @property
    def filterable(self) -> bool:
        return self.filtering is not None

    @property
    def orderable(self) -> bool:
        return self.ordering is not None


class SortDirection(int, Enum):
    UNORDERED = 0
    ASCENDING = 1
    DESCENDING = 2

    @property
    def label(self) -> str:
        return _DIRECTION_LABELS[self]

    def next(self) -> "SortDirection":
        return SortDirection((self.value + 1) % len(SortDirection))


_DIRECTION_LABELS = {
    SortDirection.UNORDERED: "none",
    SortDirection.ASCENDING: "asc",
    SortDirection.DESCENDING: "desc",
}


@dataclass(frozen=True)
class FilterState:
    column: Optional[ColumnDescriptor] = None  # None == no filter column
    text: str = ""

    @property
    def active(self) -> bool:
        return self.column is not None


@dataclass(frozen=True)
class SortState:
    column: Optional[ColumnDescriptor] = None
    direction: SortDirection = SortDirection.UNORDERED

    @property
    def active(self) -> bool:
        return self.column is not None and self.direction is not SortDirection.UNORDERED

    @property
    def direction_index(self) -> int:
        return int(self.direction)


class SlotKind(str, Enum):
    RECORD = "record"
    PLACEHOLDER = "placeholder"
    LOADING = "loading"


@dataclass(frozen=True)
class Slot:
    """One row of a page: a record, a blank filler row or a loading row."""

    kind: SlotKind
    record: Any = None

    @classmethod
    def of(cls, record: Any) -> "Slot":
        return cls(SlotKind.RECORD, record)

    @property
    def is_record(self) -> bool:
        return self.kind is SlotKind.RECORD


PLACEHOLDER_SLOT = Slot(SlotKind.PLACEHOLDER)
LOADING_SLOT = Slot(SlotKind.LOADING)


@dataclass(frozen=True)
class Page:
    index: int
    slots: Tuple[Slot, ...]

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self):
        return iter(self.slots)

    def __getitem__(self, i: int) -> Slot:
        return self.slots[i]

    def records(self) -> list:
        return [s.record for s in self.slots if s.is_record]

    @property
    def placeholder_count(self) -> int:
        return sum(1 for s in self.slots if s.kind is SlotKind.PLACEHOLDER)


@dataclass(frozen=True)
class SortIndicator:
    active: bool
    direction: str  # 'none' | 'asc' | 'desc'
    orderable: bool = False


@dataclass(frozen=True)
class FilterOption:
    key: int
    text: str
    value: str
