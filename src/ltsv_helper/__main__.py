"""Module entrypoint.

Allows:
    python -m ltsv_helper path/to/file.ltsv
"""

from __future__ import annotations

from ltsv_helper.cli import main

if __name__ == "__main__":
    main()
