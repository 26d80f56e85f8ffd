"""
File helpers for tests.
"""

from __future__ import annotations

from pathlib import Path


def write(p: Path, text: str = "") -> Path:
    """
    Write text to a file, creating parent directories as needed.

    Args:
        p: File path
        text: File contents

    Returns:
        The written path
    """
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p
