"""Result model for a complete step run."""

from datetime import datetime
from pathlib import Path

from pydantic import Field

from koverstep.core.structlog_logger import get_struct_logger
from koverstep.models.artifact import ExportRecord
from koverstep.models.base import KoverBaseModel


logger = get_struct_logger(__name__)


class StepResult(KoverBaseModel):
    """Outcome of one pipeline run.

    A failed build still carries the exports made afterwards; only the exit
    code tells the caller that the step failed.
    """

    started: datetime = Field(default_factory=datetime.now)
    build_exit_code: int | None = None
    build_error: str | None = None
    html_exports: list[ExportRecord] = Field(default_factory=list)
    xml_exports: list[ExportRecord] = Field(default_factory=list)
    test_addon_exports: list[Path] = Field(default_factory=list)
    cache_collected: bool = False
    warnings: list[str] = Field(default_factory=list)

    @property
    def build_failed(self) -> bool:
        return self.build_error is not None or (
            self.build_exit_code is not None and self.build_exit_code != 0
        )

    @property
    def exit_code(self) -> int:
        return 1 if self.build_failed else 0

    def add_warning(self, warning: str) -> None:
        """Record a non-fatal problem."""
        self.warnings.append(warning)
        logger.debug("step_warning_recorded", warning=warning)
