"""Filter column reconciliation and the record filter predicate.

The resolver keeps ``FilterState.column`` consistent with the current column
descriptor set:

 - no filterable column at all -> no filter column, empty text
 - no filter column yet        -> first filterable column (descriptor order)
 - filter column disappeared   -> no filter column, empty text
 - otherwise                   -> unchanged

Columns are matched by ``id``; a surviving column is re-bound to the new
descriptor instance so an updated accessor takes effect.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, List, Optional, Sequence

from dataview.models import ColumnDescriptor, FilterOption, FilterState

__all__ = [
    "filterable_columns",
    "find_column",
    "reconcile",
    "select_filter_column",
    "is_present",
    "matches",
    "as_filter_text",
    "filter_options",
]

log = logging.getLogger(__name__)


def filterable_columns(columns: Iterable[ColumnDescriptor]) -> List[ColumnDescriptor]:
    return [c for c in columns if c.filterable]


def find_column(
    columns: Sequence[ColumnDescriptor], column_id: Any
) -> Optional[ColumnDescriptor]:
    # First occurrence wins when ids collide
    return next((c for c in columns if c.id == column_id), None)


def reconcile(state: FilterState, columns: Sequence[ColumnDescriptor]) -> FilterState:
    filterable = filterable_columns(columns)
    if not filterable:
        return FilterState()
    if state.column is None:
        return FilterState(column=filterable[0], text="")
    current = find_column(filterable, state.column.id)
    if current is None:
        log.debug("filter column %r no longer available; clearing filter", state.column.id)
        return FilterState()
    if current is state.column:
        return state
    return FilterState(column=current, text=state.text)


def select_filter_column(
    state: FilterState, columns: Sequence[ColumnDescriptor], column_id: Any
) -> FilterState:
    """Return ``state`` with the filterable column ``column_id`` selected.

    Unknown or non-filterable ids select no column; the text is kept.
    """
    column = find_column(filterable_columns(columns), column_id)
    if column is None:
        log.debug("filter column %r is not filterable; no filter column selected", column_id)
    return FilterState(column=column, text=state.text)


def is_present(value: Any) -> bool:
    """Truthiness test used to decide whether a record has a filterable value.

    ``None``, empty strings/containers, zero, ``False`` and NaN are absent.
    """
    if isinstance(value, float) and math.isnan(value):
        return False
    try:
        return bool(value)
    except Exception:
        return False


def as_filter_text(text: Any) -> str:
    """Filter text as a string; ``None`` and unconvertible values become empty."""
    if text is None:
        return ""
    if isinstance(text, str):
        return text
    try:
        return str(text)
    except Exception as exc:
        log.debug("filter text of type %s has no string form: %s", type(text).__name__, exc)
        return ""


def matches(record: Any, state: FilterState) -> bool:
    if state.column is None or state.column.filtering is None:
        return True
    text = as_filter_text(state.text)
    try:
        value = state.column.filtering.value_of(record)
        return is_present(value) and text in str(value)
    except Exception as exc:
        log.debug("filtering on column %r failed for %r: %s", state.column.id, record, exc)
        return False


def filter_options(columns: Sequence[ColumnDescriptor]) -> List[FilterOption]:
    """Dropdown entries for choosing the filter column."""
    return [
        FilterOption(key=i, text=c.title, value=c.id)
        for i, c in enumerate(filterable_columns(columns))
    ]
