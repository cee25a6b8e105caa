#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the Almanac repository.

The repository structure:
    ROOT/
    ├── almanac/       # Toolkit code
    ├── _posts/        # Blog articles (YYYY-MM-DD-title.md)
    └── logs/          # Toolkit logs

Every CLI command accepts overrides for these defaults.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine repository root directory.

    Assumes this file is at ROOT/almanac/core/paths.py.

    Raises:
        RuntimeError: If the package directory cannot be found under ROOT
    """
    current_file = Path(__file__).resolve()

    # paths.py -> core/ -> almanac/ -> ROOT/
    root = current_file.parent.parent.parent

    if not (root / "almanac").is_dir():
        raise RuntimeError(
            f"Cannot determine valid project root. "
            f"Expected {root / 'almanac'} to exist. "
            f"Current file: {current_file}"
        )

    return root


# ----- Project directory -----
ROOT: Path = _get_project_root()

# ---- Content ----
POSTS_DIR = ROOT / "_posts"

# ---- Logs ----
LOG_DIR = ROOT / "logs"
