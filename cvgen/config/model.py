from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, List, Optional

from ..io import DEFAULT_FILE_MODE
from ..registry import KEYING_MODES
from ..types import ResourceDescriptor

_KNOWN_KEYS = {"group", "hub_version", "license_header", "template", "registry_keying", "file_mode", "resources"}


class ConfigValueError(ValueError):
    """Structural problem in a configuration mapping; the loader adds the file path."""
    pass


@dataclass(frozen=True)
class ProjectConfig:
    """
    Generation parameters of one project (one API group).

    license_header is kept as written; paths are resolved against the
    project root by the caller.
    """
    group: str
    hub_version: str
    resources: List[ResourceDescriptor] = field(default_factory=list)
    license_header: Optional[str] = None
    template: str = "conversion"
    registry_keying: str = "qualified"
    file_mode: int = DEFAULT_FILE_MODE

    @classmethod
    def from_dict(cls, obj: Any) -> ProjectConfig:
        if not isinstance(obj, dict):
            raise ConfigValueError("top level must be a mapping")
        unknown = sorted(set(obj) - _KNOWN_KEYS)
        if unknown:
            raise ConfigValueError(f"unknown keys: {', '.join(unknown)}")

        group = _req_str(obj, "group")
        hub_version = _req_str(obj, "hub_version")
        keying = _opt_str(obj, "registry_keying") or "qualified"
        if keying not in KEYING_MODES:
            raise ConfigValueError(
                f"'registry_keying' must be one of {', '.join(KEYING_MODES)}, got '{keying}'"
            )

        return cls(
            group=group,
            hub_version=hub_version,
            resources=_parse_resources(obj.get("resources", [])),
            license_header=_opt_str(obj, "license_header"),
            template=_opt_str(obj, "template") or "conversion",
            registry_keying=keying,
            file_mode=parse_file_mode(obj.get("file_mode", DEFAULT_FILE_MODE)),
        )

    def with_overrides(self, **overrides: Any) -> ProjectConfig:
        """Copy with the non-None overrides applied (CLI flags win over the file)."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def license_header_path(self, root: Path) -> Optional[Path]:
        if self.license_header is None:
            return None
        p = Path(self.license_header)
        return p if p.is_absolute() else root / p


def parse_file_mode(value: Any) -> int:
    """Accept an int (0o644 / 420) or an octal string ("0644", "644", "0o644")."""
    if isinstance(value, bool):
        raise ConfigValueError(f"'file_mode' must be an octal string or an integer, got {value!r}")
    if isinstance(value, int):
        mode = value
    elif isinstance(value, str):
        text = value.strip().lower()
        if text.startswith("0o"):
            text = text[2:]
        try:
            mode = int(text, 8)
        except ValueError:
            raise ConfigValueError(f"'file_mode' is not an octal number: {value!r}") from None
    else:
        raise ConfigValueError(f"'file_mode' must be an octal string or an integer, got {value!r}")
    if not 0 <= mode <= 0o7777:
        raise ConfigValueError(f"'file_mode' out of range: {value!r}")
    return mode


def _parse_resources(raw: Any) -> List[ResourceDescriptor]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigValueError("'resources' must be a list")
    out: List[ResourceDescriptor] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ConfigValueError(f"resources[{i}] must be a mapping with 'kind' and 'short_group'")
        kind = item.get("kind")
        short_group = item.get("short_group")
        if not isinstance(kind, str) or not kind:
            raise ConfigValueError(f"resources[{i}].kind must be a non-empty string")
        if not isinstance(short_group, str) or not short_group:
            raise ConfigValueError(f"resources[{i}].short_group must be a non-empty string")
        out.append(ResourceDescriptor(kind=kind, short_group=short_group))
    return out


def _req_str(obj: dict, key: str) -> str:
    val = obj.get(key)
    if not isinstance(val, str) or not val.strip():
        raise ConfigValueError(f"'{key}' is required and must be a non-empty string")
    return val.strip()


def _opt_str(obj: dict, key: str) -> Optional[str]:
    val = obj.get(key)
    if val is None:
        return None
    if not isinstance(val, str):
        raise ConfigValueError(f"'{key}' must be a string")
    return val.strip() or None
