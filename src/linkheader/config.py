"""Configuration for the Link header parser."""

from pathlib import Path
from typing import Annotated, Self

import yaml
from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from safir.logging import LogLevel, Profile, configure_logging

from .constants import (
    DEFAULT_ENCODING,
    DEFAULT_LANGUAGE,
    ENV_PREFIX,
    ROOT_LOGGER,
)

__all__ = ["ParserConfig"]


class EnvFirstSettings(BaseSettings):
    """Base class for Pydantic settings with environment overrides.

    Classes that inherit from this base class will prioritize environment
    variables over arguments to the class constructor.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX, extra="forbid", validate_by_name=True
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Override the sources of settings.

        Deactivate :file:`.env` and secret file support. Allow environment
        variables to override init parameters, since init parameters usually
        come from a YAML configuration file and the environment should take
        precedence.
        """
        return (env_settings, init_settings)


class ParserConfig(EnvFirstSettings):
    """Configuration for the Link header parser."""

    default_encoding: Annotated[
        str,
        Field(
            title="Default parameter encoding",
            description=(
                "Character set recorded for parameters that do not declare"
                " one with the extended ``name*=charset'lang'value`` syntax"
            ),
            validation_alias=AliasChoices(
                ENV_PREFIX + "DEFAULT_ENCODING", "defaultEncoding"
            ),
        ),
    ] = DEFAULT_ENCODING

    default_language: Annotated[
        str,
        Field(
            title="Default parameter language",
            description=(
                "Language tag recorded for parameters that do not declare one"
            ),
            validation_alias=AliasChoices(
                ENV_PREFIX + "DEFAULT_LANGUAGE", "defaultLanguage"
            ),
        ),
    ] = DEFAULT_LANGUAGE

    log_profile: Annotated[
        Profile,
        Field(
            title="Logging profile",
            validation_alias=AliasChoices(
                ENV_PREFIX + "LOG_PROFILE", "logProfile"
            ),
        ),
    ] = Profile.production

    log_level: Annotated[
        LogLevel,
        Field(
            title="Log level",
            validation_alias=AliasChoices(
                ENV_PREFIX + "LOG_LEVEL", "logLevel"
            ),
        ),
    ] = LogLevel.INFO

    add_timestamp: Annotated[
        bool,
        Field(
            title="Add timestamp to log lines",
            validation_alias=AliasChoices(
                ENV_PREFIX + "ADD_TIMESTAMP", "addTimestamp"
            ),
        ),
    ] = False

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Construct the configuration from a YAML file.

        Parameters
        ----------
        path
            Path to the configuration file in YAML.

        Returns
        -------
        ParserConfig
            The corresponding configuration.
        """
        with path.open("r") as f:
            return cls.model_validate(yaml.safe_load(f) or {})

    def configure_logging(self) -> None:
        """Configure logging for the ``linkheader`` logger."""
        configure_logging(
            profile=self.log_profile,
            log_level=self.log_level,
            add_timestamp=self.add_timestamp,
            name=ROOT_LOGGER,
        )
