"""Materialization of a built artifact into the application layer."""

import hashlib
import shutil
import uuid
import zipfile
from pathlib import Path

from build_system.buildsystem.strategy import BuildSystem
from build_system.core.exceptions.errors import ContributionError
from build_system.core.logger.logger import get_logger
from build_system.models.build import Artifact
from build_system.models.layer import LayerMetadata
from build_system.runner.layers import Layer

logger = get_logger(__name__)

# Name of a plain jar inside the layer
PLAIN_JAR_NAME = "application.jar"

_CHUNK_SIZE = 1024 * 1024


def sha256sum(path: Path) -> str:
    """Return the hex SHA-256 digest of a file."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def explode(archive: Path, destination: Path) -> int:
    """Unpack an archive into a directory.

    Args:
        archive: Jar or war file.
        destination: Directory to extract into (created if needed).

    Returns:
        Number of entries extracted.

    Raises:
        ContributionError: If an entry would be written outside destination.
    """
    destination.mkdir(parents=True, exist_ok=True)
    base = destination.resolve()

    with zipfile.ZipFile(archive) as zf:
        members = zf.infolist()
        for member in members:
            target = (base / member.filename).resolve()
            if target != base and base not in target.parents:
                raise ContributionError(
                    f"Archive entry escapes the layer: {member.filename}",
                    artifact=str(archive),
                    layer=str(destination),
                )
        zf.extractall(destination)

    return len(members)


class LayerContributor:
    """Writes an artifact into a layer, copying or exploding it."""

    def __init__(self, build_system: BuildSystem, layer: Layer) -> None:
        """Initialize the contributor.

        Args:
            build_system: Build system whose layer policy applies.
            layer: Layer to contribute to.
        """
        self.build_system = build_system
        self.layer = layer

    def expected_metadata(self, artifact: Artifact) -> LayerMetadata:
        """Return the metadata the layer will carry for an artifact."""
        launch, build, cache = self.build_system.layer_flags(artifact.kind)
        try:
            digest = sha256sum(artifact.path)
        except OSError as e:
            raise ContributionError(
                f"Unable to read artifact: {artifact.path}",
                artifact=str(artifact.path),
                layer=str(self.layer.root),
                details={"error": str(e)},
            ) from e

        return LayerMetadata(
            launch=launch,
            build=build,
            cache=cache,
            metadata={
                "artifact": artifact.name,
                "build_system": self.build_system.name,
                "kind": artifact.kind.value,
                "sha256": digest,
            },
        )

    def contribute(self, artifact: Artifact) -> Layer:
        """Materialize the artifact into the layer.

        The layer is reused untouched when it is cacheable and was built
        from the same artifact. Otherwise the new content is staged beside
        the layer and swapped in only once it is complete.

        Args:
            artifact: The discovered artifact.

        Returns:
            The contributed layer.

        Raises:
            ContributionError: If copying, exploding or writing metadata fails.
        """
        metadata = self.expected_metadata(artifact)

        if metadata.cache and self.layer.matches(metadata):
            logger.info(f"Reusing cached layer {self.layer.name}")
            return self.layer

        staging = self.layer.root.parent / f".{self.layer.name}.{uuid.uuid4().hex[:8]}"
        try:
            self._materialize(artifact, staging)
            self._swap(staging)
        except (OSError, zipfile.BadZipFile) as e:
            raise ContributionError(
                f"Unable to contribute {artifact.name} to layer {self.layer.name}",
                artifact=str(artifact.path),
                layer=str(self.layer.root),
                details={"error": str(e)},
            ) from e
        finally:
            if staging.exists():
                shutil.rmtree(staging, ignore_errors=True)

        self.layer.write_metadata(metadata)
        logger.info(
            f"Contributed {artifact.kind.value} to layer {self.layer.name} "
            f"(launch={metadata.launch}, build={metadata.build}, cache={metadata.cache})"
        )
        return self.layer

    def _materialize(self, artifact: Artifact, staging: Path) -> None:
        if artifact.kind.explodable:
            count = explode(artifact.path, staging)
            logger.debug(f"Exploded {count} entries from {artifact.path}")
        else:
            staging.mkdir(parents=True)
            shutil.copy2(artifact.path, staging / PLAIN_JAR_NAME)
            logger.debug(f"Copied {artifact.path} to {staging / PLAIN_JAR_NAME}")

    def _swap(self, staging: Path) -> None:
        root = self.layer.root
        if root.is_symlink() or root.is_file():
            root.unlink()
        elif root.exists():
            shutil.rmtree(root)
        staging.rename(root)
