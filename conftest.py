"""Pytest configuration.

Ensures that the repository root is importable so that ``sleeping_pill`` and
``sleepingpill`` resolve when tests run from a checkout, and points the data
directory at a scratch folder before any configuration is loaded.
"""

import os
import sys
import tempfile
from pathlib import Path

ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("SLEEPING_PILL_DATA_DIR", tempfile.mkdtemp(prefix="sleeping_pill_tests_"))
