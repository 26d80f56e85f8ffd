from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644


class FileWriter:
    """
    Default writer: atomic replace through a temporary sibling file.

    The parent directory must already exist; version directories are
    discovered, never created.
    """

    def write(self, path: Path, data: bytes, mode: int = DEFAULT_FILE_MODE) -> None:
        tmp = path.with_name(path.name + ".tmp")
        try:
            with tmp.open("wb") as f:
                f.write(data)
            os.chmod(tmp, mode)
            tmp.replace(path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        logger.info("wrote %s (%d bytes)", path, len(data))


__all__ = ["FileWriter", "DEFAULT_FILE_MODE"]
