from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .registry import VersionRegistry

KindName = str       # "Bucket", "BucketPolicy", ...
VersionName = str    # "v1alpha1", "v1beta1", ...


@dataclass(frozen=True)
class ResourceDescriptor:
    """
    A declared resource kind as supplied by type discovery.

    kind is PascalCase, short_group is the lowercase API group prefix.
    """
    kind: KindName
    short_group: str

    @property
    def qualified_kind(self) -> str:
        return f"{self.short_group}.{self.kind}"


# -------- Manifest --------
@dataclass(frozen=True)
class ResourceEntry:
    kind: KindName

    def to_vars(self) -> Dict[str, Any]:
        return {"CRD": {"Kind": self.kind}}


@dataclass(frozen=True)
class RenderManifest:
    api_version: VersionName
    resources: List[ResourceEntry] = field(default_factory=list)

    def to_vars(self) -> Dict[str, Any]:
        """Template variables: {APIVersion: str, Resources: [{CRD: {Kind: str}}]}."""
        return {
            "APIVersion": self.api_version,
            "Resources": [r.to_vars() for r in self.resources],
        }


@dataclass(frozen=True)
class PlannedFile:
    manifest: RenderManifest
    path: Path                    # <scanDir>/<spoke>/zz_generated.conversion.go


# -------- Result --------
@dataclass(frozen=True)
class GenerationResult:
    scan_dir: Path
    hub_version: VersionName
    files: List[PlannedFile]      # in scan order
    registry: VersionRegistry
    written: bool                 # False for dry runs

    @property
    def manifests(self) -> List[RenderManifest]:
        return [f.manifest for f in self.files]

    @property
    def spoke_versions(self) -> List[VersionName]:
        return [f.manifest.api_version for f in self.files]
