"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
import zipfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from build_system.core.config.settings import BuildSettings, LayerSettings
from build_system.models.application import Application
from build_system.models.build import Command
from build_system.runner.executor import Executor
from build_system.runner.layers import Layers

OVERRIDE_ENV_VARS = (
    "BP_BUILD_ARGUMENTS",
    "BUILD_ARGUMENTS",
    "BP_BUILT_MODULE",
    "BUILT_MODULE",
    "JAVA_HOME",
    "BUILDSYSTEM_LAYER_MAVEN_CACHE",
    "BUILDSYSTEM_LAYER_GRADLE_CACHE",
    "BUILDSYSTEM_LOGGING_LEVEL",
    "BUILDSYSTEM_CONFIG",
)


class RecordingExecutor(Executor):
    """Executor that records commands without running them.

    Args:
        outputs: Output returned by the n-th command, empty when exhausted.
        failures: Exit status by command index, zero when absent.
    """

    def __init__(
        self,
        outputs: list[str] | None = None,
        failures: dict[int, int] | None = None,
    ) -> None:
        super().__init__()
        self.outputs = outputs or []
        self.failures = failures or {}

    def _run(self, command: Command) -> None:
        index = len(self.commands) - 1
        command.output = self.outputs[index] if index < len(self.outputs) else ""
        command.exit_code = self.failures.get(index, 0)


def _write_archive(
    path: Path,
    main_class: str | None = None,
    entries: dict[str, str] | None = None,
) -> Path:
    """Write a jar or war containing a fixture marker.

    Args:
        path: Archive to create, parents are created.
        main_class: Launcher recorded in the manifest, none if not provided.
        entries: Extra entries by name.

    Returns:
        The archive path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    manifest = "Manifest-Version: 1.0\r\n"
    if main_class:
        manifest += f"Main-Class: {main_class}\r\n"

    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("META-INF/MANIFEST.MF", manifest + "\r\n")
        zf.writestr("fixture-marker", "")
        for name, content in (entries or {}).items():
            zf.writestr(name, content)
    return path


def _touch(root: Path, *parts: str) -> Path:
    """Create an empty file, including parent directories."""
    path = root.joinpath(*parts)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch()
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove operator overrides inherited from the test environment."""
    for name in OVERRIDE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test.

    Yields:
        Path to the temporary directory.
    """
    temp_path = Path(tempfile.mkdtemp()).resolve()
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def application(temp_dir: Path) -> Application:
    """Create an empty application directory."""
    root = temp_dir / "application"
    root.mkdir()
    return Application(root=root)


@pytest.fixture
def layers(temp_dir: Path) -> Layers:
    """Create the layers directory."""
    root = temp_dir / "layers"
    root.mkdir()
    return Layers(root)


@pytest.fixture
def executor() -> RecordingExecutor:
    """Create an executor answering the runtime probe."""
    return RecordingExecutor(outputs=["test-java-version"])


@pytest.fixture
def layer_settings() -> LayerSettings:
    """Layer cache policy with the default per build system values."""
    return LayerSettings(maven_cache=False, gradle_cache=True)


@pytest.fixture
def build_settings() -> BuildSettings:
    """Build settings without operator overrides."""
    return BuildSettings()


@pytest.fixture
def write_archive() -> Callable[..., Path]:
    """Return a helper writing jar or war fixtures.

    Call it as ``write_archive(path, main_class=None, entries=None)``.
    """
    return _write_archive


@pytest.fixture
def touch() -> Callable[..., Path]:
    """Return a helper creating empty files as ``touch(root, *parts)``."""
    return _touch


@pytest.fixture
def make_executor() -> Callable[..., RecordingExecutor]:
    """Return a factory for recording executors.

    Call it as ``make_executor(outputs=None, failures=None)``.
    """
    return RecordingExecutor
