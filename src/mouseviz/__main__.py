"""Entry point for ``python -m mouseviz``."""

from __future__ import annotations

from mouseviz.app import main

if __name__ in {"__main__", "__mp_main__"}:
    raise SystemExit(main())
