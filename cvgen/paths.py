"""
Path utilities for cvgen.

Single source of truth for the directory layout consumed and produced
by the generator.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

# Layout consumed: <root>/apis/<group-prefix>/<version>/zz_<kind>_types.<ext>
APIS_DIR = "apis"
TYPE_FILE_PATTERN = re.compile(r"^zz_(.+)_types\.[A-Za-z0-9]+$")

# Layout produced: <root>/apis/<group-prefix>/<spoke>/zz_generated.conversion.go
CONVERSION_FILE = "zz_generated.conversion.go"

# Defaults relative to the project root
LICENSE_HEADER = Path("hack") / "boilerplate.go.txt"
CFG_FILE = "cvgen.yaml"


def group_prefix(group: str) -> str:
    """Lowercased first dot-segment of an API group ("S3.aws.io" → "s3")."""
    return group.split(".")[0].lower()


def scan_dir(root: Path, group: str) -> Path:
    """Directory holding the version directories of a group."""
    return root / APIS_DIR / group_prefix(group)


def conversion_file(scan_root: Path, version: str) -> Path:
    """Target path of the generated conversion file for a spoke version."""
    return scan_root / version / CONVERSION_FILE


def default_license_header(root: Path) -> Path:
    return root / LICENSE_HEADER


def match_type_file(name: str) -> Optional[str]:
    """
    Extract the lowercase kind identifier from a type-definition file name.

    Returns None for names not following the zz_<id>_types.<ext> convention.
    """
    m = TYPE_FILE_PATTERN.match(name)
    if not m:
        return None
    return m.group(1)
