"""Module entrypoint for `python -m dataview`.

Delegates to `dataview.demo.main` to launch the demo window.
"""

from __future__ import annotations

import sys

from . import demo as _demo


def main():  # pragma: no cover - runtime delegation
    sys.exit(_demo.main())


if __name__ == "__main__":  # pragma: no cover
    main()
