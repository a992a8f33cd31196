"""Data view engine public API.

Small, curated surface for renderers and tests: the engine, the column
descriptor types it consumes and the page slots it produces. Importing this
package does not import Qt; the table widget lives in ``dataview.views``.
"""

from __future__ import annotations

from .models import (  # noqa: F401
    ColumnDescriptor,
    FilteringCapability,
    OrderingCapability,
    FilterState,
    SortState,
    SortDirection,
    SortIndicator,
    Slot,
    SlotKind,
    Page,
)
from .services.event_bus import DataViewEvent, Event, EventBus  # noqa: F401
from .viewmodels.data_view_engine import DataViewEngine  # noqa: F401

__all__ = [
    "ColumnDescriptor",
    "FilteringCapability",
    "OrderingCapability",
    "FilterState",
    "SortState",
    "SortDirection",
    "SortIndicator",
    "Slot",
    "SlotKind",
    "Page",
    "DataViewEvent",
    "Event",
    "EventBus",
    "DataViewEngine",
]
