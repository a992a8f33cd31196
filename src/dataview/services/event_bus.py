"""Change notifications from a DataViewEngine to its renderers.

Delivery is synchronous and in subscription order. A handler that raises is
logged and skipped; the remaining handlers still run and the engine is never
interrupted.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, NamedTuple, Tuple

__all__ = ["DataViewEvent", "Event", "EventBus"]

log = logging.getLogger(__name__)


class DataViewEvent(str, Enum):
    COLUMNS_CHANGED = "columns_changed"
    LOADING_CHANGED = "loading_changed"
    FILTER_CHANGED = "filter_changed"
    SORT_CHANGED = "sort_changed"
    VIEW_RECOMPUTED = "view_recomputed"
    PAGE_CHANGED = "page_changed"
    SELECTION_CHANGED = "selection_changed"


class Event(NamedTuple):
    name: DataViewEvent
    payload: Any


Handler = Callable[[Event], None]


class EventBus:
    def __init__(self) -> None:
        self._handlers: Dict[DataViewEvent, List[Handler]] = {}
        self._errors: List[Tuple[Event, Exception]] = []

    def subscribe(self, name: DataViewEvent, handler: Handler) -> None:
        self._handlers.setdefault(DataViewEvent(name), []).append(handler)

    def unsubscribe(self, name: DataViewEvent, handler: Handler) -> None:
        handlers = self._handlers.get(DataViewEvent(name), [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: DataViewEvent, payload: Any = None) -> Event:
        event = Event(DataViewEvent(name), payload)
        # Copy: a handler may unsubscribe while we iterate
        for handler in tuple(self._handlers.get(event.name, ())):
            try:
                handler(event)
            except Exception as exc:
                log.exception("%s handler %r failed", event.name.value, handler)
                self._errors.append((event, exc))
        return event

    @property
    def errors(self) -> List[Tuple[Event, Exception]]:
        """(event, exception) pairs for every handler failure so far."""
        return list(self._errors)
