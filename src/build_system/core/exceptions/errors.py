"""Custom exception definitions for the build runner."""

from typing import Any


class BuildSystemError(Exception):
    """Base exception for all build runner errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ExecutionError(BuildSystemError):
    """Exception raised when an external command fails or cannot start."""

    def __init__(
        self,
        message: str,
        bin: str | None = None,
        args: list[str] | None = None,
        dir: str | None = None,
        output: str = "",
        exit_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize execution error.

        Args:
            message: Error message.
            bin: Binary that was invoked.
            args: Arguments passed to the binary.
            dir: Working directory of the invocation.
            output: Captured combined output.
            exit_code: Exit status, None if the process never started.
            details: Additional error details.
        """
        details = details or {}
        if bin:
            details["bin"] = bin
        if args is not None:
            details["args"] = args
        if dir:
            details["dir"] = dir
        if exit_code is not None:
            details["exit_code"] = exit_code
        super().__init__(message, details)
        self.output = output
        self.exit_code = exit_code


class DiscoveryError(BuildSystemError):
    """Exception raised when zero or several artifacts are found."""

    def __init__(
        self,
        message: str,
        patterns: list[str] | None = None,
        candidates: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize discovery error.

        Args:
            message: Error message.
            patterns: Glob patterns that were searched.
            candidates: Paths that matched.
            details: Additional error details.
        """
        details = details or {}
        if patterns:
            details["patterns"] = patterns
        details["candidates"] = candidates or []
        super().__init__(message, details)
        self.candidates = candidates or []


class ContributionError(BuildSystemError):
    """Exception raised when the artifact cannot be materialized into a layer."""

    def __init__(
        self,
        message: str,
        artifact: str | None = None,
        layer: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize contribution error.

        Args:
            message: Error message.
            artifact: Path of the artifact being contributed.
            layer: Root of the layer being written.
            details: Additional error details.
        """
        details = details or {}
        if artifact:
            details["artifact"] = artifact
        if layer:
            details["layer"] = layer
        super().__init__(message, details)


class ReplacementError(BuildSystemError):
    """Exception raised when the application root cannot be replaced.

    The layer has already been contributed when this is raised, so
    ``layer_usable`` tells operators whether it can still be consumed even
    though the source tree may be partially modified.
    """

    def __init__(
        self,
        message: str,
        application_root: str | None = None,
        layer_root: str | None = None,
        layer_usable: bool = True,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize replacement error.

        Args:
            message: Error message.
            application_root: Application root being replaced.
            layer_root: Root of the contributed layer.
            layer_usable: Whether the layer is complete and usable.
            details: Additional error details.
        """
        details = details or {}
        if application_root:
            details["application_root"] = application_root
        if layer_root:
            details["layer_root"] = layer_root
        details["layer_usable"] = layer_usable
        super().__init__(message, details)
        self.layer_usable = layer_usable


class ConfigurationError(BuildSystemError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
