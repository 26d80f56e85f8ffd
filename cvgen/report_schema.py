from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from .types import GenerationResult


class ResourceModel(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: str


class ManifestModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    api_version: str = Field(alias="apiVersion")
    path: str
    resources: List[ResourceModel]


class GenerationReport(BaseModel):
    """JSON report printed by `cvgen generate` and `cvgen plan`."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    protocol: int = 1
    scan_dir: str = Field(alias="scanDir")
    hub_version: str = Field(alias="hubVersion")
    written: bool
    registry_keying: str = Field(alias="registryKeying")
    manifests: List[ManifestModel]
    registry: Dict[str, List[str]]


def build_report(result: GenerationResult) -> GenerationReport:
    return GenerationReport(
        scan_dir=result.scan_dir.as_posix(),
        hub_version=result.hub_version,
        written=result.written,
        registry_keying=result.registry.keying,
        manifests=[
            ManifestModel(
                api_version=f.manifest.api_version,
                path=f.path.as_posix(),
                resources=[ResourceModel(kind=r.kind) for r in f.manifest.resources],
            )
            for f in result.files
        ],
        registry=result.registry.as_dict(),
    )


__all__ = ["GenerationReport", "ManifestModel", "ResourceModel", "build_report"]
