"""Build orchestration.

The runner drives one linear pass per call::

    INIT -> PROBE_RUNTIME -> COMPUTE_ARGS -> EXECUTE_BUILD -> LOCATE_ARTIFACT
         -> CONTRIBUTE_LAYER -> REPLACE_SOURCE -> DONE

Any failure moves it to FAILED and aborts the remaining steps. Nothing is
retried, and the runner assumes it has exclusive use of the application
root for the duration of a call.
"""

from enum import Enum

from build_system.buildsystem.strategy import BuildSystem, BuildSystemKind, gradle, maven
from build_system.core.config.settings import BuildSettings, LayerSettings, get_settings
from build_system.core.exceptions.errors import ExecutionError, ReplacementError
from build_system.core.logger.logger import get_logger
from build_system.models.application import Application
from build_system.models.build import Artifact
from build_system.runner.contributor import LayerContributor
from build_system.runner.executor import Executor, SubprocessExecutor
from build_system.runner.layers import APPLICATION_LAYER, Layer, Layers
from build_system.runner.locator import locate_artifact
from build_system.runner.replacer import replace_source

logger = get_logger(__name__)


class RunnerState(str, Enum):
    """Steps of a contribution run."""

    INIT = "init"
    PROBE_RUNTIME = "probe_runtime"
    COMPUTE_ARGS = "compute_args"
    EXECUTE_BUILD = "execute_build"
    LOCATE_ARTIFACT = "locate_artifact"
    CONTRIBUTE_LAYER = "contribute_layer"
    REPLACE_SOURCE = "replace_source"
    DONE = "done"
    FAILED = "failed"


class Runner:
    """Builds an application and replaces its source with the result."""

    def __init__(
        self,
        application: Application,
        build_system: BuildSystem,
        layers: Layers,
        executor: Executor | None = None,
        settings: BuildSettings | None = None,
        layer_settings: LayerSettings | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            application: Application whose root is built and replaced.
            build_system: Build system variant for this run.
            layers: Pipeline layers directory.
            executor: Command executor, subprocess based if not provided.
            settings: Operator overrides, read from the environment if not provided.
            layer_settings: Layer cache policy, global settings if not provided.
        """
        if settings is None:
            settings = BuildSettings()
        if layer_settings is None:
            layer_settings = get_settings().layer

        cache = (
            layer_settings.gradle_cache
            if build_system.kind is BuildSystemKind.GRADLE
            else layer_settings.maven_cache
        )

        self.application = application
        self.build_system = build_system.with_cache(cache)
        self.layer = layers.layer(APPLICATION_LAYER)
        self.executor = executor or SubprocessExecutor()
        self.settings = settings
        self.state = RunnerState.INIT
        self.history: list[RunnerState] = [RunnerState.INIT]
        logger.debug(f"Build system: {self.build_system.to_dict()}")

    def _transition(self, state: RunnerState) -> None:
        self.state = state
        self.history.append(state)
        logger.debug(f"{self.build_system.name} runner: {state.value}")

    def probe_runtime(self) -> str:
        """Print the active runtime version.

        Raises:
            ExecutionError: If the runtime cannot be run.
        """
        bin, args = self.build_system.runtime_probe(self.settings.java_home)
        output = self.executor.execute(bin, self.application.root, args)
        if output.strip():
            logger.info(f"Runtime: {output.strip()}")
        return output

    def compute_args(self) -> tuple[str, list[str]]:
        """Return the wrapper binary and arguments for the build."""
        return self.build_system.build_command(self.settings.argument_list)

    def execute_build(self, bin: str, args: list[str]) -> str:
        """Run the build through the project wrapper.

        Raises:
            ExecutionError: If the wrapper is missing or the build fails.
        """
        wrapper = self.build_system.wrapper_path
        if not wrapper.is_file():
            raise ExecutionError(
                f"Build wrapper not found: {wrapper}",
                bin=str(wrapper),
                args=args,
                dir=str(self.application.root),
            )
        return self.executor.execute(bin, self.application.root, args)

    def locate_artifact(self) -> Artifact:
        """Find the artifact the build produced."""
        return locate_artifact(self.build_system, self.settings.built_module)

    def contribute_layer(self, artifact: Artifact) -> Layer:
        """Materialize the artifact into the application layer."""
        return LayerContributor(self.build_system, self.layer).contribute(artifact)

    def replace_source(self, layer: Layer, artifact: Artifact) -> None:
        """Replace the application source with the contributed layer."""
        replace_source(self.build_system, self.application, layer, artifact)

    def contribute(self) -> Layer:
        """Build the application and replace its source.

        Returns:
            The contributed application layer.

        Raises:
            ExecutionError: If the runtime probe or the build fails.
            DiscoveryError: If zero or several artifacts are found.
            ContributionError: If the layer cannot be written.
            ReplacementError: If the source cannot be replaced. The layer is
                complete in this case.
        """
        logger.info(f"Building {self.application.root} with {self.build_system.name}")

        try:
            self._transition(RunnerState.PROBE_RUNTIME)
            self.probe_runtime()

            self._transition(RunnerState.COMPUTE_ARGS)
            bin, args = self.compute_args()

            self._transition(RunnerState.EXECUTE_BUILD)
            self.execute_build(bin, args)

            self._transition(RunnerState.LOCATE_ARTIFACT)
            artifact = self.locate_artifact()

            self._transition(RunnerState.CONTRIBUTE_LAYER)
            layer = self.contribute_layer(artifact)

            self._transition(RunnerState.REPLACE_SOURCE)
            self.replace_source(layer, artifact)
        except ReplacementError as e:
            failed_in = self.state
            self._transition(RunnerState.FAILED)
            logger.error(
                f"Layer {self.layer.name} was contributed but the application root "
                f"may be partially modified ({failed_in.value}): {e}"
            )
            raise
        except Exception as e:
            failed_in = self.state
            self._transition(RunnerState.FAILED)
            logger.error(f"{self.build_system.name} build failed during {failed_in.value}: {e}")
            raise

        self._transition(RunnerState.DONE)
        logger.info(f"Build of {self.application.root} complete")
        return layer


def new_gradle_runner(
    application: Application,
    layers: Layers,
    executor: Executor | None = None,
    settings: BuildSettings | None = None,
    layer_settings: LayerSettings | None = None,
) -> Runner:
    """Create a runner for a Gradle application."""
    return Runner(application, gradle(application.root), layers, executor, settings, layer_settings)


def new_maven_runner(
    application: Application,
    layers: Layers,
    executor: Executor | None = None,
    settings: BuildSettings | None = None,
    layer_settings: LayerSettings | None = None,
) -> Runner:
    """Create a runner for a Maven application."""
    return Runner(application, maven(application.root), layers, executor, settings, layer_settings)
