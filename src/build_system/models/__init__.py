"""Data models for the build runner."""

from build_system.models.application import Application
from build_system.models.build import Artifact, ArtifactKind, Command
from build_system.models.layer import LayerMetadata

__all__ = [
    "Application",
    "Artifact",
    "ArtifactKind",
    "Command",
    "LayerMetadata",
]
