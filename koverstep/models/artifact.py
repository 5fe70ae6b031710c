"""Artifact models shared by discovery and export."""

from pathlib import Path

from pydantic import ConfigDict, Field

from koverstep.models.base import KoverBaseModel


class Artifact(KoverBaseModel):
    """A report file or directory produced by the Gradle build."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(description="Absolute path of the produced entry")
    name: str = Field(
        description="Export friendly name proposed by the project adapter"
    )
    is_dir: bool = Field(
        default=False, description="Directory artifacts are zipped as a tree"
    )


class ExportRecord(KoverBaseModel):
    """Where an artifact ended up after export."""

    model_config = ConfigDict(frozen=True)

    source: Path
    target: Path

    @property
    def target_name(self) -> str:
        return self.target.name
