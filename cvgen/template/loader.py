from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import List, Optional

# Built-in templates live under the cvgen.templates package as <id>.go.tpl
_TEMPLATES_PKG = "cvgen.templates"
_SUFFIX = ".go.tpl"


def list_builtin_templates() -> List[str]:
    """Ids of the templates shipped with the package, sorted."""
    base = resources.files(_TEMPLATES_PKG)
    out = [e.name[: -len(_SUFFIX)] for e in base.iterdir() if e.is_file() and e.name.endswith(_SUFFIX)]
    out.sort()
    return out


def load_template_source(template: str, *, root: Optional[Path] = None) -> str:
    """
    Resolve a template reference to its source text.

    `template` is either a built-in id ("conversion") or a path to a template
    file (relative paths are resolved against `root` when given).

    Raises:
        FileNotFoundError: If neither a built-in nor a file matches
    """
    res = resources.files(_TEMPLATES_PKG) / f"{template}{_SUFFIX}"
    if res.is_file():
        return res.read_text(encoding="utf-8")

    p = Path(template)
    if root is not None and not p.is_absolute():
        p = root / p
    if p.is_file():
        return p.read_text(encoding="utf-8")

    raise FileNotFoundError(
        f"Template '{template}' not found. Built-in templates: {', '.join(list_builtin_templates())}"
    )


__all__ = ["load_template_source", "list_builtin_templates"]
