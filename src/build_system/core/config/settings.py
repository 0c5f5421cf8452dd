"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from build_system.core.config.loader import ConfigLoader


class BuildSettings(BaseSettings):
    """Operator overrides for a single build run.

    These are read from the environment of the pipeline step, so a fresh
    instance should be created per run rather than cached.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    build_arguments: str | None = Field(
        default=None,
        validation_alias=AliasChoices("BP_BUILD_ARGUMENTS", "BUILD_ARGUMENTS"),
        description="Whitespace separated arguments replacing the default build arguments",
    )
    built_module: str | None = Field(
        default=None,
        validation_alias=AliasChoices("BP_BUILT_MODULE", "BUILT_MODULE"),
        description="Module whose artifact is used in a multi-module build",
    )
    java_home: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("JAVA_HOME", "java_home"),
        description="Runtime used for the version probe",
    )

    @field_validator("build_arguments", "built_module", mode="before")
    @classmethod
    def validate_blank(cls, v: str | None) -> str | None:
        """Treat blank values as unset."""
        if v is None or not str(v).strip():
            return None
        return str(v).strip()

    @field_validator("java_home", mode="before")
    @classmethod
    def validate_java_home(cls, v: str | None) -> Path | None:
        """Validate and convert java_home to Path."""
        if v is None or v == "":
            return None
        return Path(v)

    @property
    def argument_list(self) -> list[str] | None:
        """Return the build argument override tokenized on whitespace."""
        if self.build_arguments is None:
            return None
        return self.build_arguments.split()


class SectionSettings(BaseSettings):
    """Settings section that can also be filled from the YAML file.

    Keyword arguments carry the YAML values, so they rank below the
    environment and .env but above the field defaults.
    """

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, dotenv_settings, init_settings, file_secret_settings


class LayerSettings(SectionSettings):
    """Cache policy of the application layer per build system."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDSYSTEM_LAYER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    maven_cache: bool = Field(
        default=False,
        description="Cache the exploded Maven application layer",
    )
    gradle_cache: bool = Field(
        default=True,
        description="Cache the exploded Gradle application layer",
    )


class LoggingSettings(SectionSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDSYSTEM_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level",
    )
    format: str = Field(
        default="[%(name)s] %(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: str | None) -> Path | None:
        """Validate and convert file to Path."""
        if v is None or v == "":
            return None
        return Path(v)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDSYSTEM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    layer: LayerSettings = Field(default_factory=LayerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Values set through the environment or .env take precedence over the
        YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.
        """
        loader = ConfigLoader(path)
        loader.load()

        return cls(
            layer=LayerSettings(**loader.get_section("layer")),
            logging=LoggingSettings(**loader.get_section("logging")),
        )

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from default locations.

        Priority: Environment variables > .env > YAML file > defaults

        Args:
            path: Optional YAML file. Falls back to BUILDSYSTEM_CONFIG.

        Returns:
            Settings instance.
        """
        config_path = path or ConfigLoader.default_path()
        if config_path is not None and config_path.exists():
            return cls.from_yaml(config_path)

        # Environment variables and .env are automatically loaded by pydantic-settings
        return cls()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings singleton.
    """
    return Settings.load()
