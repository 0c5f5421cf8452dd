"""Maven and Gradle build system variants.

Each variant is an immutable bundle of the per-tool knowledge the runner
needs: the wrapper script, default arguments, where the artifact lands, how
the application layer is cached and how the source tree is replaced.
"""

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any

from build_system.models.build import ArtifactKind


class BuildSystemKind(str, Enum):
    """Supported build systems."""

    MAVEN = "maven"
    GRADLE = "gradle"


class ReplacementPolicy(str, Enum):
    """How the application root is replaced after contribution."""

    # Root becomes a symlink to the layer
    SYMLINK = "symlink"
    # Build-only files are removed, root stays a directory
    PRUNE = "prune"


@dataclass(frozen=True)
class BuildSystem:
    """Per-tool build configuration for one run.

    Attributes:
        kind: Which build system this is.
        root: Project root containing the wrapper script.
        wrapper: File name of the project-local wrapper.
        default_args: Arguments used when no override is configured.
        output_dir: Directory, relative to a project root, holding artifacts.
        artifact_globs: Glob patterns matched inside output_dir.
        supports_modules: Whether a module override scopes discovery.
        launch: Launch flag of an exploded application layer.
        cache: Cache flag of an exploded application layer.
        replacement: Source tree replacement policy.
        build_only: Paths, relative to root, removed by the prune policy.
    """

    kind: BuildSystemKind
    root: Path
    wrapper: str
    default_args: tuple[str, ...]
    output_dir: str
    artifact_globs: tuple[str, ...]
    supports_modules: bool
    launch: bool
    cache: bool
    replacement: ReplacementPolicy
    build_only: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        """Return the build system name."""
        return self.kind.value

    @property
    def wrapper_path(self) -> Path:
        """Return the absolute path of the wrapper script."""
        return self.root / self.wrapper

    def build_command(self, override: list[str] | None = None) -> tuple[str, list[str]]:
        """Return the wrapper binary and the build arguments.

        Args:
            override: Tokenized operator arguments replacing the defaults.

        Returns:
            Tuple of (bin, args).
        """
        args = list(override) if override is not None else list(self.default_args)
        return str(self.wrapper_path), args

    def runtime_probe(self, java_home: Path | None = None) -> tuple[str, list[str]]:
        """Return the command printing the active runtime version.

        Args:
            java_home: Runtime installation, PATH lookup if not provided.

        Returns:
            Tuple of (bin, args).
        """
        java = str(java_home / "bin" / "java") if java_home else "java"
        return java, ["-version"]

    def output_path(self, module: str | None = None) -> Path:
        """Return the directory the build writes its artifact to.

        Args:
            module: Module override, ignored by systems without module scoping.
        """
        if module and self.supports_modules:
            return self.root / module / self.output_dir
        return self.root / self.output_dir

    def artifact_patterns(self, module: str | None = None) -> list[str]:
        """Return absolute glob patterns for artifact discovery."""
        output = self.output_path(module)
        return [str(output / pattern) for pattern in self.artifact_globs]

    def layer_flags(self, kind: ArtifactKind) -> tuple[bool, bool, bool]:
        """Return (launch, build, cache) for an application layer.

        A plain jar is a library result and is never launched or cached.
        """
        if not kind.explodable:
            return False, False, False
        return self.launch, False, self.cache

    def with_cache(self, cache: bool) -> "BuildSystem":
        """Return a copy using a different layer cache policy."""
        return replace(self, cache=cache)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "kind": self.kind.value,
            "root": str(self.root),
            "wrapper": self.wrapper,
            "default_args": list(self.default_args),
            "launch": self.launch,
            "cache": self.cache,
            "replacement": self.replacement.value,
        }


def gradle(root: Path) -> BuildSystem:
    """Create the Gradle variant for a project root."""
    return BuildSystem(
        kind=BuildSystemKind.GRADLE,
        root=Path(root),
        wrapper="gradlew",
        default_args=("-x", "test", "build"),
        output_dir="build/libs",
        artifact_globs=("*.jar",),
        supports_modules=False,
        launch=True,
        cache=True,
        replacement=ReplacementPolicy.SYMLINK,
    )


def maven(root: Path) -> BuildSystem:
    """Create the Maven variant for a project root."""
    return BuildSystem(
        kind=BuildSystemKind.MAVEN,
        root=Path(root),
        wrapper="mvnw",
        default_args=("-Dmaven.test.skip=true", "package"),
        output_dir="target",
        artifact_globs=("*.jar", "*.war"),
        supports_modules=True,
        launch=False,
        cache=False,
        replacement=ReplacementPolicy.PRUNE,
        build_only=("mvnw", ".mvn", "target"),
    )


_FACTORIES = {
    BuildSystemKind.GRADLE: gradle,
    BuildSystemKind.MAVEN: maven,
}


def for_kind(kind: BuildSystemKind | str, root: Path) -> BuildSystem:
    """Create the variant for a build system kind.

    Args:
        kind: Build system kind or its name.
        root: Project root.

    Returns:
        The matching BuildSystem.

    Raises:
        ValueError: If the kind is not supported.
    """
    return _FACTORIES[BuildSystemKind(kind)](root)
