"""Command execution for build tools.

Commands run synchronously and every invocation is appended to an ordered
history so callers can inspect exactly what was run and in which order.
"""

import os
import subprocess
import time
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from build_system.core.exceptions.errors import ExecutionError
from build_system.core.logger.logger import get_logger
from build_system.models.build import Command

logger = get_logger(__name__)


class Executor(ABC):
    """Runs external programs and records each invocation."""

    def __init__(self) -> None:
        """Initialize the executor with an empty history."""
        self.commands: list[Command] = []

    def execute(self, bin: str | Path, dir: str | Path, args: Sequence[str]) -> str:
        """Run a program and return its combined output.

        Args:
            bin: Program to run.
            dir: Working directory.
            args: Program arguments.

        Returns:
            Captured stdout and stderr as one string.

        Raises:
            ExecutionError: If the program cannot start or exits non-zero.
        """
        command = Command(bin=str(bin), dir=str(dir), args=list(args))
        self.commands.append(command)

        logger.info(f"Running {command.bin} {' '.join(command.args)}")
        self._run(command)

        if command.exit_code is None:
            raise ExecutionError(
                f"Unable to start {command.bin}",
                bin=command.bin,
                args=command.args,
                dir=command.dir,
                output=command.output,
            )
        if not command.success:
            raise ExecutionError(
                f"{command.bin} exited with status {command.exit_code}",
                bin=command.bin,
                args=command.args,
                dir=command.dir,
                output=command.output,
                exit_code=command.exit_code,
            )

        return command.output

    @property
    def last(self) -> Command | None:
        """Return the most recent command, if any."""
        return self.commands[-1] if self.commands else None

    @abstractmethod
    def _run(self, command: Command) -> None:
        """Run a command, filling in its output and exit code.

        Implementations leave ``exit_code`` as None when the program could
        not be started.
        """


class SubprocessExecutor(Executor):
    """Executor backed by :func:`subprocess.run`."""

    def __init__(self, env: dict[str, str] | None = None) -> None:
        """Initialize the subprocess executor.

        Args:
            env: Extra environment variables for every command.
        """
        super().__init__()
        self.env = env or {}

    def _run(self, command: Command) -> None:
        env = os.environ.copy()
        env.update(self.env)

        start_time = time.time()
        try:
            completed = subprocess.run(
                [command.bin, *command.args],
                cwd=command.dir,
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as e:
            command.output = str(e)
            logger.error(f"Failed to start {command.bin}: {e}")
            return

        command.output = completed.stdout.decode("utf-8", errors="replace")
        command.exit_code = completed.returncode
        logger.debug(f"Finished in {time.time() - start_time:.1f}s: {command.to_dict()}")
