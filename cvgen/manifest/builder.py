from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Sequence

from ..errors import DirectoryListError
from ..paths import match_type_file
from ..registry import VersionRegistry
from ..types import RenderManifest, ResourceDescriptor, ResourceEntry

logger = logging.getLogger(__name__)


def list_entries(path: Path, purpose: str) -> List[os.DirEntry]:
    """
    List directory entries sorted by name.

    Lexical order keeps registry append order and output order stable
    across platforms. Any OSError is wrapped into DirectoryListError.
    """
    try:
        with os.scandir(path) as it:
            entries = list(it)
    except OSError as e:
        raise DirectoryListError(path, purpose) from e
    entries.sort(key=lambda e: e.name)
    return entries


def index_descriptors(descriptors: Sequence[ResourceDescriptor]) -> Dict[str, ResourceDescriptor]:
    """Lowercased kind → descriptor; the first declaration of a kind wins."""
    out: Dict[str, ResourceDescriptor] = {}
    for d in descriptors:
        out.setdefault(d.kind.lower(), d)
    return out


def list_spoke_versions(scan_root: Path, hub_version: str) -> List[str]:
    """
    Names of the version directories under scan_root, excluding the hub.

    Non-directory entries (symlinks included) are skipped; no conversion is
    generated for the hub version against itself.
    """
    out: List[str] = []
    for e in list_entries(scan_root, "looking for the spoke API versions"):
        if not e.is_dir(follow_symlinks=False):
            logger.debug("skip non-directory entry %s", e.path)
            continue
        if e.name == hub_version:
            logger.debug("skip hub version directory %s", e.path)
            continue
        out.append(e.name)
    return out


def build_version_manifest(
    *,
    version_dir: Path,
    descriptors: Dict[str, ResourceDescriptor],
    registry: VersionRegistry,
) -> RenderManifest:
    """
    Collect the convertible resources declared in one spoke version directory.

    A type file contributes a resource only when its identifier names a known
    descriptor; other type files are not convertible in this run.
    """
    version = version_dir.name
    resources: List[ResourceEntry] = []
    for f in list_entries(version_dir, "looking for the generated types"):
        if f.is_dir(follow_symlinks=False):
            continue
        ident = match_type_file(f.name)
        if ident is None:
            continue
        desc = descriptors.get(ident)
        if desc is None:
            # type may not be available in the hub version => no conversion
            logger.debug("no resource descriptor for %s in %s", f.name, version)
            continue
        resources.append(ResourceEntry(kind=desc.kind))
        registry.record(desc.short_group, desc.kind, version)

    if not resources:
        logger.warning("spoke version %s declares no convertible resources", version)
    return RenderManifest(api_version=version, resources=resources)


def build_manifests(
    *,
    scan_root: Path,
    hub_version: str,
    descriptors: Sequence[ResourceDescriptor],
    registry: VersionRegistry,
) -> List[RenderManifest]:
    """
    Build one RenderManifest per spoke version, in directory scan order.

    The first unreadable directory aborts the whole scan.
    """
    index = index_descriptors(descriptors)
    manifests: List[RenderManifest] = []
    for version in list_spoke_versions(scan_root, hub_version):
        logger.info("found spoke version %s", version)
        manifests.append(
            build_version_manifest(
                version_dir=scan_root / version,
                descriptors=index,
                registry=registry,
            )
        )
    return manifests
