"""
Collaborator protocols for the conversion generator.

The generator depends only on these contracts; the default implementations
live in cvgen.render and cvgen.io.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Protocol, runtime_checkable


class RendererError(Exception):
    """Raised by renderers when a manifest or template cannot be rendered."""
    pass


@runtime_checkable
class Renderer(Protocol):
    """Turns template variables into generated source bytes."""

    def render(self, template_id: str, variables: Mapping[str, Any]) -> bytes:
        """
        Render a template.

        Args:
            template_id: Built-in template id or template file path
            variables: {APIVersion: str, Resources: [{CRD: {Kind: str}}]}

        Returns:
            Generated source bytes

        Raises:
            RendererError: If the template or the variables are rejected
        """
        ...


@runtime_checkable
class Writer(Protocol):
    """Persists generated bytes."""

    def write(self, path: Path, data: bytes, mode: int) -> None:
        """
        Write bytes to path with the given permission bits.

        Raises:
            OSError: If the file cannot be written
        """
        ...


__all__ = ["RendererError", "Renderer", "Writer"]
