import sys
from pathlib import Path

ENTRY_ROOT = Path(__file__).resolve().parents[1]
if str(ENTRY_ROOT) not in sys.path:
    sys.path.insert(0, str(ENTRY_ROOT))
