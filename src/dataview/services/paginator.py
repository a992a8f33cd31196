"""Fixed-size page windows over a view.

Pages are always exactly ``page_size`` slots long; rows past the end of the
view are filled with placeholder slots so renderers keep a stable height.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Sequence

from config.settings import LOADING_ROW_COUNT, PAGE_SIZE
from dataview.models import LOADING_SLOT, PLACEHOLDER_SLOT, Page, Slot

__all__ = ["compute_page", "total_pages", "loading_page", "to_page_index"]

log = logging.getLogger(__name__)


def compute_page(view: Sequence[Any], page_index: int, page_size: int = PAGE_SIZE) -> Page:
    if page_index < 0:
        items: Sequence[Any] = ()
    else:
        start = page_index * page_size
        items = view[start : start + page_size]
    slots = [Slot.of(r) for r in items]
    slots.extend([PLACEHOLDER_SLOT] * (page_size - len(slots)))
    return Page(index=page_index, slots=tuple(slots))


def total_pages(view_length: int, page_size: int = PAGE_SIZE) -> int:
    if view_length <= 0:
        return 0
    return math.ceil(view_length / page_size)


def loading_page(row_count: int = LOADING_ROW_COUNT) -> Page:
    return Page(index=0, slots=(LOADING_SLOT,) * row_count)


def to_page_index(one_based_page: Any) -> int:
    """Pagination controls count from 1; page indices count from 0.

    A value that is not a page number maps to -1, an all-placeholder page.
    """
    try:
        return int(one_based_page) - 1
    except (TypeError, ValueError, OverflowError):
        log.debug("page %r is not a page number", one_based_page)
        return -1
