"""Global configuration and constants for the data view engine."""

from __future__ import annotations

import os
from typing import Final

PAGE_SIZE: Final = 10
LOADING_ROW_COUNT: Final = 10  # rows rendered while the caller reports loading
LOG_LEVEL: Final = os.environ.get("DATAVIEW_LOG_LEVEL", "WARNING").upper()

# Glyph shown in loading cells; placeholder (filler) cells stay blank
LOADING_CELL_TEXT: Final = "…"
