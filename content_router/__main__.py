"""Run the ``content-router`` CLI with ``python -m content_router``."""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":  # pragma: no cover - exercised through subprocess
    main()
