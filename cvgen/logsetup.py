from __future__ import annotations

import logging
import sys

_LOG = logging.getLogger("cvgen")


def setup_logging(verbose: bool = False) -> None:
    """
    Attach a single "[LEVEL] message" handler on the current sys.stderr to
    the "cvgen" logger.

    A handler left by a previous call is replaced, so the CLI can run several
    times in one process with a different stderr each time.
    """
    _LOG.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for old in [h for h in _LOG.handlers if getattr(h, "_cvgen", False)]:
        _LOG.removeHandler(old)
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    h._cvgen = True  # type: ignore[attr-defined]
    _LOG.addHandler(h)


__all__ = ["setup_logging"]
