"""Test package for pylineup."""

from __future__ import annotations

import sys
from pathlib import Path


# pylineup lives under src/; make it importable when pytest runs from a
# plain checkout without an editable install.
_SRC = Path(__file__).resolve().parents[1] / "src"
if _SRC.is_dir() and str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))
