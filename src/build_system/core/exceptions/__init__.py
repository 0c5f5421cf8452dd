"""Exception definitions module."""

from build_system.core.exceptions.errors import (
    BuildSystemError,
    ConfigurationError,
    ContributionError,
    DiscoveryError,
    ExecutionError,
    ReplacementError,
)

__all__ = [
    "BuildSystemError",
    "ConfigurationError",
    "ContributionError",
    "DiscoveryError",
    "ExecutionError",
    "ReplacementError",
]
