"""Module entrypoint for ``python -m eb``.

This keeps module-mode execution behavior identical to the console script.
All argument parsing happens in ``eb.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
