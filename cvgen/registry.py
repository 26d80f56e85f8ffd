"""
Hub-to-spoke version registry.

Maps a qualified kind key (``ShortGroup.Kind``) to the ordered list of spoke
versions the kind was found in. Append order is directory scan order.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

KEYING_MODES = ("qualified", "legacy")


class VersionRegistry:
    """
    Append-only accumulator of spoke versions per resource kind.

    Keying modes:
      • "qualified": append under ShortGroup.Kind, every version accumulates.
      • "legacy": the value stored under ShortGroup.Kind is rebuilt from the
        list under the plain Kind key plus the new version. Without a writer
        for the plain key only the last version survives.
    """

    def __init__(self, keying: str = "qualified", entries: Optional[Mapping[str, List[str]]] = None):
        if keying not in KEYING_MODES:
            raise ValueError(f"Unknown registry keying '{keying}'. Expected one of: {', '.join(KEYING_MODES)}")
        self.keying = keying
        self._entries: Dict[str, List[str]] = {k: list(v) for k, v in (entries or {}).items()}
        # appends made through record(), replayed by merge()
        self._appends: List[Tuple[str, str, str]] = []

    def record(self, short_group: str, kind: str, version: str) -> None:
        key = f"{short_group}.{kind}"
        if self.keying == "legacy":
            self._entries[key] = self._entries.get(kind, []) + [version]
        else:
            self._entries.setdefault(key, []).append(version)
        self._appends.append((short_group, kind, version))
        logger.debug("registry: %s += %s (%s)", key, version, self.keying)

    def merge(self, other: VersionRegistry) -> None:
        """
        Replay the appends recorded in `other`, in their original order.

        Appends go through this registry's keying, so legacy lookups see
        its existing plain-kind entries.
        """
        for short_group, kind, version in other._appends:
            self.record(short_group, kind, version)

    def versions(self, key: str) -> List[str]:
        return list(self._entries.get(key, []))

    def as_dict(self) -> Dict[str, List[str]]:
        return {k: list(v) for k, v in self._entries.items()}

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        for k, v in self._entries.items():
            yield k, list(v)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionRegistry):
            return NotImplemented
        return self.keying == other.keying and self._entries == other._entries

    def __repr__(self) -> str:
        return f"VersionRegistry(keying={self.keying!r}, entries={self._entries!r})"


__all__ = ["VersionRegistry", "KEYING_MODES"]
