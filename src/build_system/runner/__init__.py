"""Build orchestration: execute, locate, contribute and replace."""

from build_system.runner.contributor import LayerContributor
from build_system.runner.executor import Executor, SubprocessExecutor
from build_system.runner.layers import APPLICATION_LAYER, Layer, Layers
from build_system.runner.locator import classify, locate_artifact
from build_system.runner.replacer import replace_source
from build_system.runner.runner import (
    Runner,
    RunnerState,
    new_gradle_runner,
    new_maven_runner,
)

__all__ = [
    "APPLICATION_LAYER",
    "Executor",
    "Layer",
    "LayerContributor",
    "Layers",
    "Runner",
    "RunnerState",
    "SubprocessExecutor",
    "classify",
    "locate_artifact",
    "new_gradle_runner",
    "new_maven_runner",
    "replace_source",
]
