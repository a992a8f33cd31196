"""Demo window for `python -m dataview`.

Builds a table of sample developer-portal accounts so the engine can be
exercised by hand: filter by email or name, click headers to cycle sorting,
page through the results.
"""

from __future__ import annotations

import logging
import sys
from typing import Dict, List

from config import settings
from dataview.models import ColumnDescriptor, FilteringCapability, OrderingCapability

_ROLES = ("Admin", "Partner", "Customer")


def sample_accounts(count: int = 37) -> List[Dict[str, object]]:
    accounts: List[Dict[str, object]] = []
    for i in range(count):
        accounts.append(
            {
                "id": f"acct-{i:03d}",
                "email": f"user{i:02d}@example.com",
                "name": f"User {i:02d}" if i % 7 else "",
                "role": _ROLES[i % len(_ROLES)],
                "created": 1_600_000_000 + (i * 7919) % 5000,
            }
        )
    return accounts


def account_columns() -> List[ColumnDescriptor]:
    return [
        ColumnDescriptor(
            id="email",
            title="Email",
            filtering=FilteringCapability("email"),
            ordering=OrderingCapability("email"),
            render=lambda a: a["email"],
        ),
        ColumnDescriptor(
            id="name",
            title="Name",
            filtering=FilteringCapability("name"),
            ordering=OrderingCapability(lambda a: str(a["name"]).lower()),
            render=lambda a: a["name"] or "-",
        ),
        ColumnDescriptor(
            id="role",
            title="Role",
            ordering=OrderingCapability("role"),
            render=lambda a: a["role"],
        ),
        ColumnDescriptor(id="created", title="Created", render=lambda a: str(a["created"])),
    ]


def main(argv: List[str] | None = None):  # pragma: no cover - runtime
    from PyQt6.QtWidgets import QApplication

    from dataview.services.event_bus import DataViewEvent, EventBus
    from dataview.viewmodels.data_view_engine import DataViewEngine
    from dataview.views.data_table_view import DataTableView

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)
    bus = EventBus()
    bus.subscribe(
        DataViewEvent.SELECTION_CHANGED,
        lambda event: logging.getLogger(__name__).info("selected %r", event.payload),
    )
    engine = DataViewEngine(sample_accounts(), account_columns(), event_bus=bus)
    view = DataTableView(engine)
    view.setWindowTitle("Accounts")
    view.resize(720, 480)
    view.show()
    return app.exec()
