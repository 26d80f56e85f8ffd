"""
cvgen: conversion function generator for schema-versioned resource types.

Scans the spoke API versions of a group and writes the conversion functions
that translate every spoke type to and from the hub version.
"""

from .errors import ConfigError, CvgenUserError, DirectoryListError, RenderError, WriteError
from .generator import ConversionConvertibleGenerator
from .registry import VersionRegistry
from .types import GenerationResult, RenderManifest, ResourceDescriptor, ResourceEntry

__all__ = [
    "ConfigError",
    "CvgenUserError",
    "DirectoryListError",
    "RenderError",
    "WriteError",
    "ConversionConvertibleGenerator",
    "VersionRegistry",
    "GenerationResult",
    "RenderManifest",
    "ResourceDescriptor",
    "ResourceEntry",
]
