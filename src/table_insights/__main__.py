"""Package entry point.

Preferred invocation is via the installed console script:

    table-insights ...

For convenience we also support:

    python -m table_insights ...
"""

from __future__ import annotations

from .cli import app


def main() -> None:
    """Entry point used by `python -m table_insights`."""

    app()


if __name__ == "__main__":
    main()
