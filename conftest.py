# conftest.py (repo root)
# Make sure the repo root is on sys.path so `core.*`, `infra.*` and `log_reader.*` import without installing.
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
root_str = str(ROOT)

if root_str not in sys.path:
    sys.path.insert(0, root_str)
