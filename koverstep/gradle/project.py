"""Gradle project adapter."""

import os
from pathlib import Path

from koverstep.core.errors import ProjectOpenError
from koverstep.core.structlog_logger import get_struct_logger
from koverstep.gradle.matcher import MatchMode, PathMatcher
from koverstep.gradle.task import GradleTask
from koverstep.models.artifact import Artifact
from koverstep.protocols import CommandFactoryProtocol, CommandProtocol


logger = get_struct_logger(__name__)

GRADLEW = "gradlew"


class GradleProject:
    """A Gradle workspace driven through its wrapper script."""

    def __init__(
        self, location: Path, command_factory: CommandFactoryProtocol
    ) -> None:
        self.location = location
        self.command_factory = command_factory
        self.matcher = PathMatcher(location)

    @classmethod
    def open(
        cls, location: Path, command_factory: CommandFactoryProtocol
    ) -> "GradleProject":
        """Open the project at ``location``.

        Raises:
            ProjectOpenError: If the location is not a directory or has no
                executable gradlew
        """
        location = location.expanduser().resolve()
        if not location.is_dir():
            raise ProjectOpenError(
                f"project location is not a directory: {location}",
                {"location": str(location)},
            )

        wrapper = location / GRADLEW
        if not wrapper.is_file():
            raise ProjectOpenError(
                f"no {GRADLEW} found in {location}", {"location": str(location)}
            )
        if not os.access(wrapper, os.X_OK):
            raise ProjectOpenError(
                f"{wrapper} is not executable", {"location": str(location)}
            )

        logger.debug("project_opened", location=str(location))
        return cls(location, command_factory)

    @property
    def wrapper(self) -> Path:
        return self.location / GRADLEW

    def get_task(self, name: str) -> GradleTask:
        return GradleTask(self, name)

    def create_command(self, *args: str) -> CommandProtocol:
        """Prepare a gradlew invocation running in the project directory."""
        return self.command_factory.create(
            str(self.wrapper), *args, cwd=self.location
        )

    def find_dirs(
        self, generated_after: float, pattern: str, include_module_name: bool
    ) -> list[Artifact]:
        """Find report directories matching ``pattern``."""
        return self.matcher.find(
            pattern,
            modtime_floor=generated_after,
            mode=MatchMode.DIRECTORY,
            include_module_name=include_module_name,
        )

    def find_artifacts(
        self, generated_after: float, pattern: str, include_module_name: bool
    ) -> list[Artifact]:
        """Find report files matching ``pattern``."""
        return self.matcher.find(
            pattern,
            modtime_floor=generated_after,
            mode=MatchMode.FILE,
            include_module_name=include_module_name,
        )
