from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import ConfigError
from ..paths import CFG_FILE
from .model import ConfigValueError, ProjectConfig

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def config_path(root: Path, explicit: Optional[Path] = None) -> Path:
    """Explicit path (relative to root) or <root>/cvgen.yaml."""
    if explicit is None:
        return root / CFG_FILE
    return explicit if explicit.is_absolute() else root / explicit


def load_config(root: Path, explicit: Optional[Path] = None) -> ProjectConfig:
    """
    Load the project configuration.

    Args:
        root: Project root
        explicit: Config file path from --config, if any

    Returns:
        Parsed ProjectConfig

    Raises:
        ConfigError: If the file is missing, is not valid YAML or has invalid values
    """
    path = config_path(root, explicit)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(path, "file not found") from None
    except OSError as e:
        raise ConfigError(path, f"cannot read file: {e}") from e

    try:
        raw = _yaml.load(text)
    except YAMLError as e:
        raise ConfigError(path, f"malformed YAML: {e}") from e

    try:
        cfg = ProjectConfig.from_dict(raw or {})
    except ConfigValueError as e:
        raise ConfigError(path, str(e)) from e

    logger.debug("loaded %s: group=%s hub=%s resources=%d", path, cfg.group, cfg.hub_version, len(cfg.resources))
    return cfg


__all__ = ["config_path", "load_config"]
