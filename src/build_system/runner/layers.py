"""On-disk layer directories and their metadata files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from build_system.core.exceptions.errors import ContributionError
from build_system.core.logger.logger import get_logger
from build_system.models.layer import LayerMetadata

logger = get_logger(__name__)

APPLICATION_LAYER = "build-system-application"


class Layer:
    """A named contribution directory with a metadata file beside it."""

    def __init__(self, name: str, layers_root: Path) -> None:
        """Initialize the layer.

        Args:
            name: Layer name.
            layers_root: Directory holding all layers.
        """
        self.name = name
        self.root = layers_root / name
        self.metadata_path = layers_root / f"{name}.yaml"

    def __repr__(self) -> str:
        return f"Layer(name={self.name!r}, root={str(self.root)!r})"

    def read_metadata(self) -> LayerMetadata | None:
        """Read the metadata file, None if absent or unreadable."""
        if not self.metadata_path.exists():
            return None

        try:
            with open(self.metadata_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return LayerMetadata.model_validate(data)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable layer metadata {self.metadata_path}: {e}")
            return None

    def write_metadata(self, metadata: LayerMetadata) -> None:
        """Write the metadata file.

        Raises:
            ContributionError: If the file cannot be written.
        """
        try:
            self.metadata_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.metadata_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(metadata.model_dump(), f, sort_keys=True)
        except OSError as e:
            raise ContributionError(
                f"Unable to write layer metadata: {self.metadata_path}",
                layer=str(self.root),
                details={"error": str(e)},
            ) from e

    def matches(self, metadata: LayerMetadata) -> bool:
        """Return whether the layer on disk was produced from the same inputs."""
        existing = self.read_metadata()
        return existing is not None and existing == metadata and self.root.is_dir()


class Layers:
    """The pipeline's layers directory."""

    def __init__(self, root: Path) -> None:
        """Initialize the layers directory.

        Args:
            root: Directory holding all layers.
        """
        self.root = Path(root)

    def layer(self, name: str) -> Layer:
        """Return the layer with the given name."""
        return Layer(name, self.root)
