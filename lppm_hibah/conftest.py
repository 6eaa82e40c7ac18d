"""Root conftest: ensures `lppm_hibah.X` imports work without an install."""
import sys
from pathlib import Path

_here = Path(__file__).resolve().parent
_parent = _here.parent

# Add repo root so `lppm_hibah.X` works
if str(_parent) not in sys.path:
    sys.path.insert(0, str(_parent))
