"""Build system variants (Maven, Gradle)."""

from build_system.buildsystem.strategy import (
    BuildSystem,
    BuildSystemKind,
    ReplacementPolicy,
    for_kind,
    gradle,
    maven,
)

__all__ = [
    "BuildSystem",
    "BuildSystemKind",
    "ReplacementPolicy",
    "for_kind",
    "gradle",
    "maven",
]
