"""DataTableView

QTableWidget-based rendering of a `DataViewEngine`: search box and filter
column selector above the table (optional action widgets to their right),
clickable headers cycling the sort direction, and previous/next paging below.
The widget never refreshes itself after calling the engine; it redraws from
the engine's event bus, so changes made directly on the engine show up too. The table always shows exactly one
page of rows; filler rows are blank and loading rows show a placeholder glyph.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from PyQt6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from config.settings import LOADING_CELL_TEXT
from dataview.models import ColumnDescriptor, SlotKind
from dataview.services.event_bus import DataViewEvent, EventBus
from dataview.viewmodels.data_view_engine import DataViewEngine

__all__ = ["DataTableView"]

log = logging.getLogger(__name__)

_INDICATOR_GLYPHS = {"asc": "▲", "desc": "▼", "none": "↕"}


class DataTableView(QWidget):
    def __init__(
        self,
        engine: DataViewEngine | None = None,
        parent: Optional[QWidget] = None,
        *,
        toolbar_actions: Sequence[QWidget] = (),
    ):
        super().__init__(parent)
        self.engine = engine or DataViewEngine()
        if self.engine.event_bus is None:
            self.engine.set_event_bus(EventBus())
        self._build_ui(toolbar_actions)
        self._connect_bus(self.engine.event_bus)
        self.refresh()

    def _build_ui(self, toolbar_actions: Sequence[QWidget]):
        root = QVBoxLayout(self)
        toolbar = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setObjectName("dataTableSearch")
        self.search_input.setPlaceholderText("Search by...")
        self.search_input.setMaximumWidth(320)
        self.search_input.textChanged.connect(self._on_search_changed)  # type: ignore
        toolbar.addWidget(self.search_input)
        self.filter_column_combo = QComboBox()
        self.filter_column_combo.setObjectName("dataTableFilterColumn")
        self.filter_column_combo.currentIndexChanged.connect(self._on_filter_column_changed)  # type: ignore
        toolbar.addWidget(self.filter_column_combo)
        toolbar.addStretch(1)
        for action in toolbar_actions:
            toolbar.addWidget(action)
        root.addLayout(toolbar)

        self.table = QTableWidget(self.engine.page_size, 0)
        self.table.setObjectName("dataTable")
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table.verticalHeader().setVisible(False)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setStretchLastSection(True)
        header.setSectionsClickable(True)
        header.sectionClicked.connect(self._on_header_clicked)  # type: ignore
        self.table.cellClicked.connect(self._on_cell_clicked)  # type: ignore
        root.addWidget(self.table)

        footer = QHBoxLayout()
        footer.addStretch(1)
        self.prev_button = QPushButton("‹")
        self.prev_button.clicked.connect(self._on_prev_clicked)  # type: ignore
        footer.addWidget(self.prev_button)
        self.page_label = QLabel("")
        self.page_label.setObjectName("dataTablePageLabel")
        footer.addWidget(self.page_label)
        self.next_button = QPushButton("›")
        self.next_button.clicked.connect(self._on_next_clicked)  # type: ignore
        footer.addWidget(self.next_button)
        root.addLayout(footer)

    def _connect_bus(self, bus: EventBus):
        redraw = {
            DataViewEvent.COLUMNS_CHANGED: self.refresh,
            DataViewEvent.LOADING_CHANGED: self._refresh_body,
            DataViewEvent.FILTER_CHANGED: self._refresh_toolbar,
            DataViewEvent.SORT_CHANGED: self._refresh_headers,
            DataViewEvent.PAGE_CHANGED: self._refresh_body,
            DataViewEvent.SELECTION_CHANGED: self._refresh_selection,
        }
        for name, method in redraw.items():
            bus.subscribe(name, lambda _event, method=method: method())

    # Inputs -------------------------------------------------------------
    def set_records(self, records: Sequence[Any]):
        self.engine.set_records(records)

    def set_columns(self, columns: Sequence[ColumnDescriptor]):
        self.engine.set_columns(columns)

    def set_loading(self, loading: bool):
        self.engine.set_loading(loading)

    # Rendering ----------------------------------------------------------
    def refresh(self):
        self._refresh_toolbar()
        self._refresh_headers()
        self._refresh_body()

    def _refresh_body(self):
        self._refresh_rows()
        self._refresh_pagination()

    def _refresh_toolbar(self):
        options = self.engine.filter_options()
        self.search_input.setVisible(bool(options))
        if self.search_input.text() != self.engine.filter_state.text:
            self.search_input.blockSignals(True)
            self.search_input.setText(self.engine.filter_state.text)
            self.search_input.blockSignals(False)
        self.filter_column_combo.blockSignals(True)
        try:
            self.filter_column_combo.clear()
            for opt in options:
                self.filter_column_combo.addItem(opt.text, opt.value)
            active = self.engine.get_active_filter_column()
            idx = self.filter_column_combo.findData(active.id) if active else -1
            self.filter_column_combo.setCurrentIndex(idx)
        finally:
            self.filter_column_combo.blockSignals(False)

    def _refresh_headers(self):
        columns = self.engine.columns
        self.table.setColumnCount(len(columns))
        labels: List[str] = []
        for column in columns:
            indicator = self.engine.get_sort_indicator(column.id)
            if indicator.active or indicator.orderable:
                labels.append(f"{column.title} {_INDICATOR_GLYPHS[indicator.direction]}")
            else:
                labels.append(column.title)
        self.table.setHorizontalHeaderLabels(labels)

    def _refresh_rows(self):
        page = self.engine.get_visible_page()
        columns = self.engine.columns
        self.table.setRowCount(len(page))
        self.table.setSelectionMode(
            QAbstractItemView.SelectionMode.NoSelection
            if self.engine.loading
            else QAbstractItemView.SelectionMode.SingleSelection
        )
        for r, slot in enumerate(page):
            for c, column in enumerate(columns):
                self.table.setItem(r, c, QTableWidgetItem(self._cell_text(slot, column)))
        self._refresh_selection()

    def _refresh_selection(self):
        self.table.clearSelection()
        if self.engine.loading:
            return
        for r, slot in enumerate(self.engine.get_visible_page()):
            if slot.is_record and self.engine.is_selected(slot.record):
                self.table.selectRow(r)

    def _cell_text(self, slot, column: ColumnDescriptor) -> str:
        if slot.kind is SlotKind.LOADING:
            return LOADING_CELL_TEXT
        if slot.kind is SlotKind.PLACEHOLDER:
            return ""
        try:
            return str(column.render(slot.record))
        except Exception:
            log.exception("render for column %r failed", column.id)
            return ""

    def _refresh_pagination(self):
        total = self.engine.get_total_pages()
        current = self.engine.active_page + 1
        loading = self.engine.loading
        self.page_label.setText(f"Page {current} of {total}" if total else "No results")
        self.prev_button.setEnabled(not loading and current > 1)
        self.next_button.setEnabled(not loading and current < total)

    # Callbacks ----------------------------------------------------------
    def _on_search_changed(self, text: str):
        self.engine.set_filter_text(text)

    def _on_filter_column_changed(self, index: int):
        self.engine.set_filter_column(self.filter_column_combo.itemData(index))

    def _on_header_clicked(self, logical_index: int):
        columns = self.engine.columns
        if 0 <= logical_index < len(columns):
            self.engine.toggle_order(columns[logical_index].id)

    def _on_cell_clicked(self, row: int, _column: int):
        if self.engine.loading:
            return
        page = self.engine.get_visible_page()
        if 0 <= row < len(page) and page[row].is_record:
            self.engine.select(page[row].record)

    def _on_prev_clicked(self):
        # Active page is zero-based; the engine expects a one-based page
        self.engine.on_page_change(self.engine.active_page)

    def _on_next_clicked(self):
        self.engine.on_page_change(self.engine.active_page + 2)

    # Testing helpers ------------------------------------------------------
    def cell_text(self, row: int, column: int) -> str:
        item = self.table.item(row, column)
        return item.text() if item else ""

    def header_text(self, column: int) -> str:
        item = self.table.horizontalHeaderItem(column)
        return item.text() if item else ""
