from .errors import (
    ConfigError,
    DiscoveryError,
    ExportError,
    FileSystemError,
    KoverStepError,
    ModuleNotFoundInProjectError,
    ProjectOpenError,
    VariantFilterError,
    VariantNotFoundError,
    VariantsFetchError,
)
from .logging import setup_logging


__all__ = [
    "setup_logging",
    "ConfigError",
    "DiscoveryError",
    "ExportError",
    "FileSystemError",
    "KoverStepError",
    "ModuleNotFoundInProjectError",
    "ProjectOpenError",
    "VariantFilterError",
    "VariantNotFoundError",
    "VariantsFetchError",
]
