"""Replacement of the application source tree after contribution.

Gradle and Maven leave the application root in different shapes and the
downstream launch tooling depends on each shape, so the two policies are
kept separate.
"""

import os
import shutil
import uuid
from pathlib import Path

from build_system.buildsystem.strategy import BuildSystem, ReplacementPolicy
from build_system.core.exceptions.errors import ReplacementError
from build_system.core.logger.logger import get_logger
from build_system.models.application import Application
from build_system.models.build import Artifact
from build_system.runner.layers import Layer

logger = get_logger(__name__)


def remove_path(path: Path) -> bool:
    """Remove a file, symlink or directory tree.

    Returns:
        True if something was removed.
    """
    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    if path.is_dir():
        shutil.rmtree(path)
        return True
    return False


def link_to_layer(application: Application, layer: Layer) -> None:
    """Replace the application root with a symlink to the layer root.

    The link is created under a temporary name first and the original tree
    is only deleted once the link is in place. If the swap fails the
    original root is restored.

    Raises:
        ReplacementError: If the root is already linked, cannot be swapped
            or the old tree cannot be deleted.
    """
    root = application.root
    if application.is_symlink:
        raise ReplacementError(
            f"Application root is already linked: {root}",
            application_root=str(root),
            layer_root=str(layer.root),
        )

    suffix = uuid.uuid4().hex[:8]
    link = root.parent / f".{root.name}.link-{suffix}"
    backup = root.parent / f".{root.name}.source-{suffix}"

    try:
        os.symlink(layer.root.absolute(), link, target_is_directory=True)
    except OSError as e:
        raise ReplacementError(
            f"Unable to create link to layer {layer.name}",
            application_root=str(root),
            layer_root=str(layer.root),
            details={"error": str(e)},
        ) from e

    try:
        root.rename(backup)
    except OSError as e:
        link.unlink()
        raise ReplacementError(
            f"Unable to move application root aside: {root}",
            application_root=str(root),
            layer_root=str(layer.root),
            details={"error": str(e)},
        ) from e

    try:
        link.rename(root)
    except OSError as e:
        backup.rename(root)
        link.unlink()
        raise ReplacementError(
            f"Unable to link application root to layer {layer.name}",
            application_root=str(root),
            layer_root=str(layer.root),
            details={"error": str(e)},
        ) from e

    try:
        shutil.rmtree(backup)
    except OSError as e:
        raise ReplacementError(
            f"Application root linked but old source remains at {backup}",
            application_root=str(root),
            layer_root=str(layer.root),
            details={"error": str(e), "source": str(backup)},
        ) from e

    logger.info(f"Linked {root} to {layer.root}")


def prune_build_files(
    build_system: BuildSystem,
    application: Application,
    layer: Layer,
    artifact: Artifact,
) -> None:
    """Remove build-only files and place the layer content in the root.

    The root stays an ordinary directory and files that are not build-only
    are left alone.

    Raises:
        ReplacementError: If a file cannot be removed or copied.
    """
    root = application.root
    targets = [root / name for name in build_system.build_only]
    output = artifact.path.parent
    if output != root and root in output.parents and output not in targets:
        targets.append(output)

    removed: list[str] = []
    try:
        for target in targets:
            if remove_path(target):
                removed.append(str(target.relative_to(root)))
        shutil.copytree(layer.root, root, dirs_exist_ok=True, symlinks=True)
    except OSError as e:
        raise ReplacementError(
            f"Unable to replace build files in {root}",
            application_root=str(root),
            layer_root=str(layer.root),
            details={"error": str(e), "removed": removed},
        ) from e

    logger.info(f"Removed build files from {root}: {', '.join(removed) or 'none'}")


def replace_source(
    build_system: BuildSystem,
    application: Application,
    layer: Layer,
    artifact: Artifact,
) -> None:
    """Replace the application source according to the build system's policy."""
    if build_system.replacement is ReplacementPolicy.SYMLINK:
        link_to_layer(application, layer)
    else:
        prune_build_files(build_system, application, layer, artifact)
