"""Service layer exports.

Responsibilities:
 - Filter column reconciliation and the filter predicate (`filter_resolver`)
 - Filtered/sorted view computation (`view_computer`)
 - Page windowing (`paginator`)
 - Sort direction cycle (`sort_cycle`)
 - EventBus publish/subscribe core
"""

from .event_bus import EventBus, DataViewEvent  # noqa: F401

__all__ = [
    "EventBus",
    "DataViewEvent",
]
