import sys
from pathlib import Path

# Make the src/ tree importable for `python -m unittest` run from the repo root.
SRC_ROOT = Path(__file__).resolve().parent / "src"
if SRC_ROOT.is_dir() and str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))
