"""Build execution and artifact data models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class ArtifactKind(str, Enum):
    """Kind of deployable artifact produced by a build."""

    PLAIN_JAR = "plain-jar"
    EXECUTABLE_JAR = "executable-jar"
    WAR = "war"

    @property
    def explodable(self) -> bool:
        """Return whether the artifact is unpacked rather than copied."""
        return self is not ArtifactKind.PLAIN_JAR


@dataclass
class Command:
    """A single subprocess invocation.

    Attributes:
        bin: Binary that was invoked.
        dir: Working directory.
        args: Arguments passed to the binary.
        output: Captured combined stdout and stderr.
        exit_code: Exit status, None if the process never started.
    """

    bin: str
    dir: str
    args: list[str] = field(default_factory=list)
    output: str = ""
    exit_code: int | None = None

    @property
    def success(self) -> bool:
        """Return whether the command exited with status zero."""
        return self.exit_code == 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "bin": self.bin,
            "dir": self.dir,
            "args": self.args,
            "exit_code": self.exit_code,
        }


@dataclass(frozen=True)
class Artifact:
    """The deployable output discovered after a build.

    Attributes:
        path: Location of the jar or war file.
        kind: Classification driving explode-vs-copy behavior.
        module: Owning module in a multi-module build, if scoped.
    """

    path: Path
    kind: ArtifactKind
    module: str | None = None

    @property
    def name(self) -> str:
        """Return the artifact file name."""
        return self.path.name
