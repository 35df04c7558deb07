"""Package entry point.

Preferred invocation is via the installed console script:

    dialogix ...

For convenience we also support:

    python -m dialogix ...
"""

from __future__ import annotations

from .cli import app


def main() -> None:
    """Entry point used by `python -m dialogix`."""

    app()


if __name__ == "__main__":
    main()
