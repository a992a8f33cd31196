"""View computation: filter, then stable single-column sort.

``compute_view`` is a pure function of its inputs. Python's sort is stable in
both directions (``reverse=True`` keeps equal keys in input order), which is
what the view relies on for ties.

Keys that cannot be compared with each other (``None`` next to ints, mixed
str/int, ...) fall back to ordering by ``(type name, repr)`` so a view can
always be produced. A key whose iteratee raised sorts after every real key in
ascending order.
"""

from __future__ import annotations

import logging
from functools import total_ordering
from typing import Any, Iterable, List, Tuple

from dataview.models import FilterState, SortDirection, SortState

from .filter_resolver import matches

__all__ = ["SortValue", "compute_view", "sort_records"]

log = logging.getLogger(__name__)

_MISSING = object()


@total_ordering
class SortValue:
    """Wraps a sort key with a comparison that never raises."""

    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value

    def _fallback(self) -> Tuple[int, str, str]:
        if self.value is _MISSING:
            return (1, "", "")
        return (0, type(self.value).__name__, repr(self.value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SortValue):
            return NotImplemented
        if self.value is _MISSING or other.value is _MISSING:
            return self.value is other.value
        try:
            return bool(self.value == other.value)
        except Exception:
            return self._fallback() == other._fallback()

    def __lt__(self, other: "SortValue") -> bool:
        if self.value is _MISSING or other.value is _MISSING:
            return self._fallback() < other._fallback()
        try:
            return bool(self.value < other.value)
        except Exception:
            return self._fallback() < other._fallback()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"SortValue({'<missing>' if self.value is _MISSING else repr(self.value)})"


def sort_records(rows: Iterable[Any], state: SortState) -> List[Any]:
    result = list(rows)
    if state.column is None or state.column.ordering is None:
        return result
    if state.direction is SortDirection.UNORDERED:
        return result
    ordering = state.column.ordering
    column_id = state.column.id

    def _key(record: Any) -> SortValue:
        try:
            return SortValue(ordering.key_of(record))
        except Exception as exc:
            log.debug("iteratee for column %r failed on %r: %s", column_id, record, exc)
            return SortValue(_MISSING)

    result.sort(key=_key, reverse=state.direction is SortDirection.DESCENDING)
    return result


def compute_view(
    source: Iterable[Any], filter_state: FilterState, sort_state: SortState
) -> Tuple[Any, ...]:
    """Return the filtered and ordered view of ``source`` as a new tuple."""
    rows = list(source)
    if filter_state.active:
        rows = [r for r in rows if matches(r, filter_state)]
    return tuple(sort_records(rows, sort_state))
