"""Report discovery and export."""

from .deploy import DeployExporter
from .harvester import ArtifactHarvester
from .test_addon import (
    OTHER_DIR_NAME,
    ExportDirResolver,
    TestAddonExporter,
    get_export_dir,
)


__all__ = [
    "OTHER_DIR_NAME",
    "ArtifactHarvester",
    "DeployExporter",
    "ExportDirResolver",
    "TestAddonExporter",
    "get_export_dir",
]
