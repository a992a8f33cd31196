"""ViewModel deriving a filtered, ordered and paginated view of records.

``DataViewEngine`` owns the filter and sort state; the view and the visible
page are derived from (records, filter, sort, active page) and replaced by a
single pipeline pass after every mutating call:

    column change -> filter/sort reconciliation -> view -> page 0 -> notify

While the caller reports ``loading`` the view/page steps are skipped and
``get_visible_page`` returns loading slots; the pass runs once loading ends.

Every page transition clears the selected record and reports it through the
``on_select`` callback (and ``selection_changed`` on the event bus).
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from config.settings import LOADING_ROW_COUNT, PAGE_SIZE
from dataview.models import (
    ColumnDescriptor,
    FilterOption,
    FilterState,
    Page,
    SortIndicator,
    SortState,
)
from dataview.services import filter_resolver, sort_cycle
from dataview.services.event_bus import DataViewEvent, EventBus
from dataview.services.paginator import compute_page, loading_page, to_page_index, total_pages
from dataview.services.view_computer import compute_view

__all__ = ["DataViewEngine"]

log = logging.getLogger(__name__)

SelectCallback = Callable[[Optional[Any]], None]


class DataViewEngine:
    """Headless filtered, ordered and paginated view over ``records``.

    ``selected_record`` only seeds the selection: construction ends with the
    initial transition to page 0, which clears it and calls ``on_select(None)``.
    After that ``select`` is the only way to set the selection from outside,
    and it calls ``on_select`` as well.

    With an ``event_bus`` every change is also published as a ``DataViewEvent``
    once the pass that caused it has settled.
    """

    def __init__(
        self,
        records: Iterable[Any] = (),
        columns: Sequence[ColumnDescriptor] = (),
        *,
        loading: bool = False,
        selected_record: Any = None,
        on_select: SelectCallback | None = None,
        event_bus: EventBus | None = None,
        page_size: int = PAGE_SIZE,
    ):
        self._records: Tuple[Any, ...] = tuple(records)
        self._columns: Tuple[ColumnDescriptor, ...] = ()
        self._filter = FilterState()
        self._sort = SortState()
        self._loading = bool(loading)
        self._selected = selected_record
        self._on_select = on_select
        self._bus = event_bus
        self._pending: List[Tuple[DataViewEvent, Any]] = []
        self._page_size = max(1, int(page_size))
        self._view: Tuple[Any, ...] = ()
        self._active_page = 0
        self._page = compute_page(self._view, 0, self._page_size)
        self._store_columns(columns)
        self._filter = filter_resolver.reconcile(self._filter, self._columns)
        self._run_pipeline()

    # Inputs --------------------------------------------------------------
    def set_records(self, records: Iterable[Any]) -> None:
        self._records = tuple(records)
        self._run_pipeline()

    def set_columns(self, columns: Sequence[ColumnDescriptor]) -> None:
        self._store_columns(columns)
        self._publish(DataViewEvent.COLUMNS_CHANGED, self._columns)
        new_filter = filter_resolver.reconcile(self._filter, self._columns)
        new_sort = sort_cycle.reconcile(self._sort, self._columns)
        if new_filter is self._filter and new_sort is self._sort:
            self._flush()
            return
        self._update_filter(new_filter)
        self._update_sort(new_sort)
        self._run_pipeline()

    def set_loading(self, loading: bool) -> None:
        loading = bool(loading)
        if loading == self._loading:
            return
        self._loading = loading
        self._publish(DataViewEvent.LOADING_CHANGED, loading)
        if loading:
            self._flush()
        else:
            self._run_pipeline()

    def set_on_select(self, callback: SelectCallback | None) -> None:
        self._on_select = callback

    def set_event_bus(self, bus: EventBus | None) -> None:
        self._bus = bus

    # Filter / sort ---------------------------------------------------------
    def set_filter_column(self, column_id: Any) -> None:
        new_state = filter_resolver.select_filter_column(self._filter, self._columns, column_id)
        if new_state.column is self._filter.column:
            return
        self._update_filter(new_state)
        self._run_pipeline()

    def set_filter_text(self, text: Any) -> None:
        text = filter_resolver.as_filter_text(text)
        if text == self._filter.text:
            return
        self._update_filter(FilterState(column=self._filter.column, text=text))
        self._run_pipeline()

    def toggle_order(self, column_id: Any) -> None:
        new_state = sort_cycle.toggle_by_id(self._sort, self._columns, column_id)
        if new_state is self._sort:
            return
        self._update_sort(new_state)
        self._run_pipeline()

    # Paging / selection ------------------------------------------------
    def on_page_change(self, one_based_page: int) -> None:
        if self._loading:
            log.debug("page change to %s ignored while loading", one_based_page)
            return
        self._go_to_page(to_page_index(one_based_page))
        self._flush()

    def select(self, record: Any) -> None:
        self._set_selected(record)
        self._flush()

    def is_selected(self, record: Any) -> bool:
        return self._selected is not None and record is self._selected

    # Queries -------------------------------------------------------------
    def get_visible_page(self) -> Page:
        if self._loading:
            return loading_page(LOADING_ROW_COUNT)
        return self._page

    def get_view(self) -> Tuple[Any, ...]:
        return self._view

    def get_total_pages(self) -> int:
        return total_pages(len(self._view), self._page_size)

    def get_filterable_columns(self) -> List[ColumnDescriptor]:
        return filter_resolver.filterable_columns(self._columns)

    def get_active_filter_column(self) -> Optional[ColumnDescriptor]:
        return self._filter.column

    def get_sort_indicator(self, column_id: Any) -> SortIndicator:
        return sort_cycle.indicator_for(self._sort, self._columns, column_id)

    def filter_options(self) -> List[FilterOption]:
        return filter_resolver.filter_options(self._columns)

    @property
    def records(self) -> Tuple[Any, ...]:
        return self._records

    @property
    def columns(self) -> Tuple[ColumnDescriptor, ...]:
        return self._columns

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def active_page(self) -> int:
        return self._active_page

    @property
    def selected_record(self) -> Any:
        return self._selected

    @property
    def filter_state(self) -> FilterState:
        return self._filter

    @property
    def sort_state(self) -> SortState:
        return self._sort

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def event_bus(self) -> Optional[EventBus]:
        return self._bus

    # Pipeline ------------------------------------------------------------
    def _store_columns(self, columns: Sequence[ColumnDescriptor]) -> None:
        self._columns = tuple(columns)
        dupes = [cid for cid, n in Counter(c.id for c in self._columns).items() if n > 1]
        if dupes:
            log.warning("duplicate column ids %s; first occurrence wins", dupes)

    def _update_filter(self, state: FilterState) -> None:
        changed = state != self._filter
        self._filter = state
        if changed:
            self._publish(DataViewEvent.FILTER_CHANGED, state)

    def _update_sort(self, state: SortState) -> None:
        changed = state != self._sort
        self._sort = state
        if changed:
            self._publish(DataViewEvent.SORT_CHANGED, state)

    def _run_pipeline(self) -> None:
        if self._loading:
            self._flush()
            return
        self._view = compute_view(self._records, self._filter, self._sort)
        log.debug(
            "view recomputed: %d of %d records (filter=%r, sort=%r/%s)",
            len(self._view),
            len(self._records),
            self._filter.column.id if self._filter.column else None,
            self._sort.column.id if self._sort.column else None,
            self._sort.direction.label,
        )
        self._publish(DataViewEvent.VIEW_RECOMPUTED, len(self._view))
        self._go_to_page(0)
        self._flush()

    def _go_to_page(self, page_index: int) -> None:
        self._active_page = page_index
        self._page = compute_page(self._view, page_index, self._page_size)
        self._publish(DataViewEvent.PAGE_CHANGED, page_index)
        self._set_selected(None)

    def _set_selected(self, record: Any) -> None:
        self._selected = record
        if self._on_select is not None:
            try:
                self._on_select(record)
            except Exception:
                log.exception("on_select callback failed")
        self._publish(DataViewEvent.SELECTION_CHANGED, record)

    def _publish(self, name: DataViewEvent, payload: Any) -> None:
        # Queued until the pass settles; see _flush
        if self._bus is not None:
            self._pending.append((name, payload))

    def _flush(self) -> None:
        pending, self._pending = self._pending, []
        for name, payload in pending:
            self._bus.publish(name, payload)  # type: ignore[union-attr]
