"""Vercel function exposing the recipe planner routes.

The deployment bundles the repository as-is, so ``src`` is put on the import
path before the ASGI app is loaded.
"""

import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from recipe_planner.api.asgi import app  # noqa: E402

__all__ = ["app"]
