"""Step configuration read from the Bitrise environment."""

import shlex
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from koverstep.core.errors import ConfigError
from koverstep.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)

DEFAULT_HTML_PATTERN = "*build/reports/kover/html*"
DEFAULT_XML_PATTERN = "*build/reports/kover/xml*"


class CacheLevel(str, Enum):
    """How much of the Gradle workspace is handed to the build cache."""

    NONE = "none"
    ONLY_DEPS = "only_deps"
    ALL = "all"


class StepConfig(BaseSettings):
    """Immutable step inputs with automatic environment variable parsing.

    Input names follow the step definition (lower case) while the deploy and
    test result directories come from the standard Bitrise variables.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    project_location: Path = Field(
        default=Path("."), description="Root directory of the Gradle project"
    )
    report_path_pattern: str = Field(
        default=DEFAULT_HTML_PATTERN,
        description="Pattern locating the HTML report directories",
    )
    result_path_pattern: str = Field(
        default=DEFAULT_XML_PATTERN,
        description="Pattern locating the XML report directories",
    )
    variant: str = Field(default="", description="Variant to build, empty for all")
    module: str = Field(default="", description="Module to build, empty for all")
    arguments: str = Field(
        default="", description="Extra Gradle arguments, shell quoted"
    )
    cache_level: CacheLevel = Field(default=CacheLevel.ONLY_DEPS)
    is_debug: bool = False

    deploy_dir: Path = Field(
        validation_alias=AliasChoices("BITRISE_DEPLOY_DIR", "deploy_dir"),
        description="Destination of the zipped reports",
    )
    test_result_dir: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("BITRISE_TEST_RESULT_DIR", "test_result_dir"),
        description="Test addon result root, export is skipped when unset",
    )

    @field_validator("project_location")
    @classmethod
    def validate_project_location(cls, v: Path) -> Path:
        """The project location must be an existing directory."""
        resolved = v.expanduser().resolve()
        if not resolved.exists():
            raise ValueError(f"Project location does not exist: {resolved}")
        if not resolved.is_dir():
            raise ValueError(f"Project location is not a directory: {resolved}")
        return resolved

    @field_validator("report_path_pattern", "result_path_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Path pattern must not be empty")
        return v.strip()

    @field_validator("variant", "module")
    @classmethod
    def strip_selector(cls, v: str) -> str:
        return v.strip()

    @field_validator("arguments")
    @classmethod
    def validate_arguments(cls, v: str) -> str:
        """Arguments must be splittable with shell quoting rules."""
        try:
            shlex.split(v)
        except ValueError as e:
            raise ValueError(f"Failed to parse arguments: {e}") from e
        return v

    @field_validator("cache_level", mode="before")
    @classmethod
    def normalize_cache_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("deploy_dir", "test_result_dir")
    @classmethod
    def expand_dir(cls, v: Path | None) -> Path | None:
        if v is None:
            return None
        return v.expanduser().absolute()

    @property
    def extra_args(self) -> list[str]:
        """Gradle arguments split into an ordered list."""
        return shlex.split(self.arguments)

    def display_items(self) -> list[tuple[str, str]]:
        """Rows shown in the configuration table."""
        return [
            ("project_location", str(self.project_location)),
            ("report_path_pattern", self.report_path_pattern),
            ("result_path_pattern", self.result_path_pattern),
            ("variant", self.variant or "<all>"),
            ("module", self.module or "<all>"),
            ("arguments", self.arguments),
            ("cache_level", str(CacheLevel(self.cache_level).value)),
            ("is_debug", str(self.is_debug).lower()),
            ("BITRISE_DEPLOY_DIR", str(self.deploy_dir)),
            ("BITRISE_TEST_RESULT_DIR", str(self.test_result_dir or "")),
        ]


def load_step_config(**overrides: Any) -> StepConfig:
    """Read the step configuration from the environment.

    Args:
        **overrides: Values taking precedence over the environment

    Returns:
        StepConfig: Parsed configuration

    Raises:
        ConfigError: If any input is missing or invalid
    """
    try:
        config = StepConfig(**overrides)
    except ValidationError as e:
        logger.debug("config_validation_failed", errors=e.errors())
        raise ConfigError(f"Invalid step configuration: {e}") from e

    logger.debug("config_loaded", config=config.model_dump(mode="json"))
    return config
