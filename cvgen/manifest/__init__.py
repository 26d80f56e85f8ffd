from .builder import (
    build_manifests,
    build_version_manifest,
    index_descriptors,
    list_entries,
    list_spoke_versions,
)

__all__ = [
    "build_manifests",
    "build_version_manifest",
    "index_descriptors",
    "list_entries",
    "list_spoke_versions",
]
