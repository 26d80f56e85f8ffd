"""
Utilities for working with the CLI in tests.
"""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any


def run_cli(root: Path, *args: str) -> subprocess.CompletedProcess:
    """
    Run `python -m cvgen.cli` with the given arguments in `root`.
    """
    env = os.environ.copy()
    return subprocess.run(
        [sys.executable, "-m", "cvgen.cli", *args],
        cwd=root, env=env, capture_output=True, text=True, encoding="utf-8"
    )


def jload(s: str) -> Any:
    return json.loads(s)
