"""Serverless entrypoint exposing the food ordering API as ``app``.

The deployment bundles the repository without installing it, so ``src`` is
added to the import path before the application package is loaded.
"""

import sys
from pathlib import Path

_SRC_DIR = Path(__file__).resolve().parent.parent / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from food_ordering.api.app import create_app  # noqa: E402
from food_ordering.containers import build_container  # noqa: E402

app = create_app(build_container())
