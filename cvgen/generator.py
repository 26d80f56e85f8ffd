"""
Conversion function generator.

Generates the conversion methods (ConvertTo/ConvertFrom) of the spoke API
versions of a group, so that every spoke type converts to and from the hub
version.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .errors import RenderError, WriteError
from .io import DEFAULT_FILE_MODE, FileWriter
from .manifest import build_manifests, list_spoke_versions
from .paths import conversion_file, default_license_header, scan_dir
from .protocols import Renderer, RendererError, Writer
from .registry import VersionRegistry
from .render import TemplateRenderer
from .types import GenerationResult, PlannedFile, ResourceDescriptor

logger = logging.getLogger(__name__)

CONVERSION_TEMPLATE = "conversion"


class ConversionConvertibleGenerator:
    """
    Generates conversion functions for every spoke version of one API group.

    The hub version directory is never processed. Generation runs in three
    phases (scan, render, write); a scan or render failure leaves the tree
    untouched, a write failure stops at the failing file.
    """

    def __init__(
        self,
        *,
        root: Path,
        group: str,
        hub_version: str,
        license_header_path: Optional[Path] = None,
        renderer: Optional[Renderer] = None,
        writer: Optional[Writer] = None,
        template: str = CONVERSION_TEMPLATE,
        registry_keying: str = "qualified",
        file_mode: int = DEFAULT_FILE_MODE,
    ):
        """
        Args:
            root: Project root holding the apis/ directory
            group: API group ("s3.aws.upbound.io"); its first segment names the scan directory
            hub_version: Version treated as the hub
            license_header_path: License header for generated files
                (defaults to <root>/hack/boilerplate.go.txt)
            renderer: Render collaborator (defaults to TemplateRenderer)
            writer: Write collaborator (defaults to FileWriter)
            template: Template id or path handed to the renderer
            registry_keying: "qualified" or "legacy", see VersionRegistry
            file_mode: Permission bits of the generated files
        """
        self.root = root
        self.group = group
        self.hub_version = hub_version
        self.scan_dir = scan_dir(root, group)
        self.license_header_path = license_header_path or default_license_header(root)
        self.renderer: Renderer = renderer or TemplateRenderer(
            license_header_path=self.license_header_path,
            root=root,
        )
        self.writer: Writer = writer or FileWriter()
        self.template = template
        self.registry_keying = registry_keying
        self.file_mode = file_mode

    def spoke_versions(self) -> List[str]:
        return list_spoke_versions(self.scan_dir, self.hub_version)

    def plan(
        self,
        descriptors: Sequence[ResourceDescriptor],
        registry: Optional[VersionRegistry] = None,
    ) -> GenerationResult:
        """
        Scan phase only: manifests, registry and target paths, nothing rendered or written.

        Raises:
            DirectoryListError: If the scan directory or a version directory cannot be listed
        """
        target = registry if registry is not None else VersionRegistry(self.registry_keying)
        scanned = VersionRegistry(target.keying)
        files = self._scan(descriptors, scanned)
        target.merge(scanned)
        return GenerationResult(
            scan_dir=self.scan_dir,
            hub_version=self.hub_version,
            files=files,
            registry=target,
            written=False,
        )

    def generate(
        self,
        descriptors: Sequence[ResourceDescriptor],
        registry: Optional[VersionRegistry] = None,
    ) -> GenerationResult:
        """
        Write zz_generated.conversion.go into every spoke version directory.

        Args:
            descriptors: Known resource kinds
            registry: Optional accumulator shared across several groups;
                a fresh one is created otherwise

        Returns:
            GenerationResult with the written files and the version registry

        Raises:
            DirectoryListError: If a directory cannot be listed
            RenderError: If a manifest cannot be rendered
            WriteError: If a generated file cannot be written
        """
        target = registry if registry is not None else VersionRegistry(self.registry_keying)
        # the caller's registry only sees appends from a run that wrote every file
        scanned = VersionRegistry(target.keying)
        files = self._scan(descriptors, scanned)

        rendered: List[Tuple[PlannedFile, bytes]] = []
        for pf in files:
            try:
                data = self.renderer.render(self.template, pf.manifest.to_vars())
            except RendererError as e:
                raise RenderError(pf.path, str(e)) from e
            rendered.append((pf, data))

        for pf, data in rendered:
            try:
                self.writer.write(pf.path, data, self.file_mode)
            except OSError as e:
                raise WriteError(pf.path, e.strerror or str(e)) from e
        target.merge(scanned)

        logger.info(
            "generated conversion functions for %d spoke version(s) of %s (hub %s)",
            len(files), self.group, self.hub_version,
        )
        return GenerationResult(
            scan_dir=self.scan_dir,
            hub_version=self.hub_version,
            files=files,
            registry=target,
            written=True,
        )

    def _scan(self, descriptors: Sequence[ResourceDescriptor], registry: VersionRegistry) -> List[PlannedFile]:
        manifests = build_manifests(
            scan_root=self.scan_dir,
            hub_version=self.hub_version,
            descriptors=descriptors,
            registry=registry,
        )
        return [
            PlannedFile(manifest=m, path=conversion_file(self.scan_dir, m.api_version))
            for m in manifests
        ]


__all__ = ["ConversionConvertibleGenerator", "CONVERSION_TEMPLATE"]
