"""pagebinder CLI script.

Usage:
    python cli/main.py --help

The commands live in :mod:`pagebinder.cli`; this file only makes them
runnable from a source checkout without installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from pagebinder.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from pagebinder.cli import app  # noqa: E402

if __name__ == "__main__":
    app()
