"""Two-phase report discovery."""

from datetime import datetime

from koverstep.core.structlog_logger import StructlogMixin
from koverstep.gradle.project import GradleProject
from koverstep.models.artifact import Artifact
from koverstep.protocols import ConsoleProtocol


class ArtifactHarvester(StructlogMixin):
    """Find the reports a build produced.

    The first pass only accepts entries modified after the build started. A
    build served from cache leaves its outputs untouched, so when nothing
    fresh is found a second pass accepts any modification time.
    """

    def __init__(self, project: GradleProject, console: ConsoleProtocol) -> None:
        super().__init__()
        self.project = project
        self.console = console

    def harvest(
        self,
        pattern: str,
        started: float,
        include_module_name: bool,
        directory_mode: bool,
    ) -> list[Artifact]:
        """Discover artifacts matching ``pattern``.

        Args:
            pattern: Report path pattern
            started: POSIX timestamp of the build start
            include_module_name: Prefix artifact names with their module
            directory_mode: Look for directories instead of files

        Returns:
            list[Artifact]: Fresh artifacts, or any matching artifact when
            nothing fresh exists (possibly empty)

        Raises:
            DiscoveryError: If the project tree cannot be listed
        """
        artifacts = self._find(pattern, started, include_module_name, directory_mode)
        if artifacts:
            return artifacts

        started_at = datetime.fromtimestamp(started).isoformat(sep=" ")
        self.console.print_warning(
            f"No artifacts found with pattern: {pattern} that has modification time after: {started_at}"
        )
        self.console.print_warning("Retrying without modtime check....")
        self.console.print_blank()

        artifacts = self._find(pattern, 0.0, include_module_name, directory_mode)
        if not artifacts:
            self.console.print_warning(
                f"No artifacts found with pattern: {pattern} without modtime check"
            )
            self.console.print_warning(
                "If you have changed default report export path in your gradle files "
                "then you might need to change the path pattern accordingly."
            )
        self.logger.debug(
            "harvest_fallback", pattern=pattern, count=len(artifacts)
        )
        return artifacts

    def _find(
        self,
        pattern: str,
        generated_after: float,
        include_module_name: bool,
        directory_mode: bool,
    ) -> list[Artifact]:
        if directory_mode:
            return self.project.find_dirs(generated_after, pattern, include_module_name)
        return self.project.find_artifacts(
            generated_after, pattern, include_module_name
        )
