"""Export zipped reports into the Bitrise deploy directory."""

from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path

from koverstep.adapters import create_file_adapter
from koverstep.core.errors import ExportError, FileSystemError
from koverstep.core.structlog_logger import StructlogMixin
from koverstep.models.artifact import Artifact, ExportRecord
from koverstep.protocols import ConsoleProtocol, FileAdapterProtocol
from koverstep.utils.paths import display_path


COLLISION_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


class DeployExporter(StructlogMixin):
    """Zip artifacts into the deploy directory under unique names.

    ``<name>.zip`` is used when free, otherwise the name gets a seconds
    resolution timestamp: ``<name>-20240115120000.zip``. Existing files are
    never overwritten; an artifact whose timestamped name is taken as well
    is skipped with a warning.
    """

    def __init__(
        self,
        deploy_dir: Path,
        console: ConsoleProtocol,
        file_adapter: FileAdapterProtocol | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__()
        self.deploy_dir = deploy_dir
        self.console = console
        self.file_adapter = file_adapter or create_file_adapter()
        self.clock = clock

    def export(self, artifacts: Iterable[Artifact]) -> list[ExportRecord]:
        """Export every artifact, skipping the ones that fail to zip.

        Args:
            artifacts: Artifacts to export, in order

        Returns:
            list[ExportRecord]: Successfully written archives

        Raises:
            ExportError: If the deploy directory cannot be prepared or inspected
        """
        try:
            self.file_adapter.mkdir(self.deploy_dir)
        except FileSystemError as e:
            raise ExportError(
                f"failed to create deploy directory, error: {e}",
                {"deploy_dir": str(self.deploy_dir)},
            ) from e

        records: list[ExportRecord] = []
        for artifact in artifacts:
            name = self.target_name(artifact)
            if name is None:
                self.console.print_warning(
                    f"failed to export artifact ({artifact.path}), error: "
                    f"{artifact.name}.zip and its timestamped name already exist"
                )
                self.logger.warning(
                    "artifact_export_skipped", artifact=str(artifact.path)
                )
                continue

            target = self.deploy_dir / name
            self.console.print_plain(
                f"  Export [ {display_path(artifact.path)} => $BITRISE_DEPLOY_DIR/{name} ]"
            )

            try:
                self.file_adapter.create_zip(artifact.path, target)
            except FileSystemError as e:
                self.console.print_warning(
                    f"failed to export artifact ({artifact.path}), error: {e}"
                )
                self.log_error_with_context(
                    "artifact_export_failed", e, artifact=str(artifact.path)
                )
                continue

            records.append(ExportRecord(source=artifact.path, target=target))

        self.logger.debug("deploy_export_finished", exported=len(records))
        return records

    def target_name(self, artifact: Artifact) -> str | None:
        """Archive name for ``artifact`` that does not exist yet.

        Returns:
            The plain or timestamped name, None when both are taken

        Raises:
            ExportError: If the deploy directory cannot be inspected
        """
        name = f"{artifact.name}.zip"
        if not self._exists(name):
            return name

        timestamp = self.clock().strftime(COLLISION_TIMESTAMP_FORMAT)
        name = f"{artifact.name}-{timestamp}.zip"
        self.logger.debug("deploy_name_collision", name=name)
        if not self._exists(name):
            return name
        return None

    def _exists(self, name: str) -> bool:
        try:
            return self.file_adapter.exists(self.deploy_dir / name)
        except FileSystemError as e:
            raise ExportError(
                f"failed to check path, error: {e}", {"path": str(e.path)}
            ) from e
