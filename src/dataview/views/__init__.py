"""Qt view layer rendering data view engines.

Exports:
 - DataTableView
"""

from .data_table_view import DataTableView  # noqa: F401
