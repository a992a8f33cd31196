"""Tri-state sort direction cycle for a single active column.

Toggling the active column walks unordered -> ascending -> descending ->
unordered (clearing the column). Toggling any other column always starts at
ascending.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from dataview.models import ColumnDescriptor, SortDirection, SortIndicator, SortState

from .filter_resolver import find_column

__all__ = ["toggle", "toggle_by_id", "reconcile", "indicator_for"]

log = logging.getLogger(__name__)


def toggle(state: SortState, column: ColumnDescriptor) -> SortState:
    if state.column is not None and state.column.id == column.id:
        direction = state.direction.next()
        if direction is SortDirection.UNORDERED:
            return SortState()
        return SortState(column=column, direction=direction)
    return SortState(column=column, direction=SortDirection.UNORDERED.next())


def toggle_by_id(
    state: SortState, columns: Sequence[ColumnDescriptor], column_id: Any
) -> SortState:
    column = find_column(columns, column_id)
    if column is None or not column.orderable:
        log.debug("ignoring order toggle for non-orderable column %r", column_id)
        return state
    return toggle(state, column)


def reconcile(state: SortState, columns: Sequence[ColumnDescriptor]) -> SortState:
    """Re-bind the active sort column after a descriptor change."""
    if state.column is None:
        return state
    current = find_column(columns, state.column.id)
    if current is None or not current.orderable:
        log.debug("sort column %r no longer available; clearing sort", state.column.id)
        return SortState()
    if current is state.column:
        return state
    return SortState(column=current, direction=state.direction)


def indicator_for(
    state: SortState, columns: Sequence[ColumnDescriptor], column_id: Any
) -> SortIndicator:
    column = find_column(columns, column_id)
    orderable = column is not None and column.orderable
    if state.column is not None and state.column.id == column_id:
        return SortIndicator(active=True, direction=state.direction.label, orderable=orderable)
    return SortIndicator(
        active=False, direction=SortDirection.UNORDERED.label, orderable=orderable
    )
