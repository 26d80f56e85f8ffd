"""
In-memory collaborators for the generator.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from cvgen.protocols import RendererError


class FakeRenderer:
    """Records every call and returns a deterministic byte string."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def render(self, template_id: str, variables: Mapping[str, Any]) -> bytes:
        self.calls.append((template_id, dict(variables)))
        kinds = ",".join(r["CRD"]["Kind"] for r in variables["Resources"])
        return f"{variables['APIVersion']}:{kinds}\n".encode("utf-8")


class FailingRenderer(FakeRenderer):
    """Fails for one API version."""

    def __init__(self, fail_version: str) -> None:
        super().__init__()
        self.fail_version = fail_version

    def render(self, template_id: str, variables: Mapping[str, Any]) -> bytes:
        if variables["APIVersion"] == self.fail_version:
            raise RendererError(f"cannot render {self.fail_version}")
        return super().render(template_id, variables)


class FakeWriter:
    """Keeps written files in memory."""

    def __init__(self) -> None:
        self.files: Dict[Path, bytes] = {}
        self.modes: Dict[Path, int] = {}

    def write(self, path: Path, data: bytes, mode: int) -> None:
        self.files[path] = data
        self.modes[path] = mode


class FailingWriter(FakeWriter):
    def __init__(self, fail_path: Optional[Path] = None) -> None:
        super().__init__()
        self.fail_path = fail_path

    def write(self, path: Path, data: bytes, mode: int) -> None:
        if self.fail_path is None or path == self.fail_path:
            raise PermissionError(13, "Permission denied", str(path))
        super().write(path, data, mode)
