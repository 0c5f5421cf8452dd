"""Artifact discovery after a completed build."""

import glob
import zipfile
from pathlib import Path

from build_system.buildsystem.strategy import BuildSystem
from build_system.core.exceptions.errors import DiscoveryError
from build_system.core.logger.logger import get_logger
from build_system.models.build import Artifact, ArtifactKind

logger = get_logger(__name__)

MANIFEST_PATH = "META-INF/MANIFEST.MF"

# Manifest attributes naming a launcher entrypoint, lowercased
LAUNCHER_ATTRIBUTES = ("main-class", "start-class")


def read_manifest(archive: Path) -> dict[str, str]:
    """Read the main section of a jar manifest.

    Args:
        archive: Path to the jar or war file.

    Returns:
        Manifest attributes, empty if the archive has no manifest.

    Raises:
        DiscoveryError: If the file is not a readable zip archive.
    """
    try:
        with zipfile.ZipFile(archive) as zf:
            try:
                raw = zf.read(MANIFEST_PATH)
            except KeyError:
                return {}
    except (OSError, zipfile.BadZipFile) as e:
        raise DiscoveryError(
            f"Unable to read artifact: {archive}",
            candidates=[str(archive)],
            details={"error": str(e)},
        ) from e

    return parse_manifest(raw.decode("utf-8", errors="replace"))


def parse_manifest(text: str) -> dict[str, str]:
    """Parse the main section of a manifest, joining continuation lines.

    Attribute names are case-insensitive, so keys are returned lowercased.
    """
    attributes: dict[str, str] = {}
    key: str | None = None

    for line in text.splitlines():
        if not line.strip():
            # Main section ends at the first blank line
            if attributes:
                break
            continue
        if line.startswith(" ") and key is not None:
            attributes[key] += line[1:]
            continue
        name, sep, value = line.partition(":")
        if not sep:
            continue
        key = name.strip().lower()
        attributes[key] = value.strip()

    return attributes


def classify(archive: Path) -> ArtifactKind:
    """Classify an artifact by its packaged entrypoint metadata.

    A war is always exploded. A jar is executable only when its manifest
    names a launcher class.
    """
    if archive.suffix.lower() == ".war":
        return ArtifactKind.WAR

    manifest = read_manifest(archive)
    if any(manifest.get(attr) for attr in LAUNCHER_ATTRIBUTES):
        return ArtifactKind.EXECUTABLE_JAR
    return ArtifactKind.PLAIN_JAR


def find_candidates(build_system: BuildSystem, module: str | None = None) -> list[Path]:
    """Return every file matching the artifact patterns, sorted."""
    candidates: set[Path] = set()
    for pattern in build_system.artifact_patterns(module):
        candidates.update(Path(p) for p in glob.glob(pattern) if Path(p).is_file())
    return sorted(candidates)


def locate_artifact(build_system: BuildSystem, module: str | None = None) -> Artifact:
    """Find the single artifact produced by a build.

    Args:
        build_system: Build system whose output conventions apply.
        module: Module override scoping discovery, if supported.

    Returns:
        The discovered and classified Artifact.

    Raises:
        DiscoveryError: If zero or more than one candidate is found.
    """
    if module and not build_system.supports_modules:
        logger.warning(f"Module override '{module}' is ignored for {build_system.name}")
        module = None

    patterns = build_system.artifact_patterns(module)
    candidates = find_candidates(build_system, module)

    if not candidates:
        raise DiscoveryError(
            f"No built artifact found for {build_system.name}",
            patterns=patterns,
        )
    if len(candidates) > 1:
        raise DiscoveryError(
            f"Multiple built artifacts found for {build_system.name}",
            patterns=patterns,
            candidates=[str(c) for c in candidates],
        )

    path = candidates[0]
    artifact = Artifact(path=path, kind=classify(path), module=module)
    logger.info(f"Found {artifact.kind.value} artifact: {path}")
    return artifact
