"""Error hierarchy for the Kover step."""

from pathlib import Path
from typing import Any


class KoverStepError(Exception):
    """Base class for all step errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


class ConfigError(KoverStepError):
    """Step configuration could not be parsed or validated."""


class ProjectOpenError(KoverStepError):
    """The Gradle project could not be opened."""


class VariantsFetchError(KoverStepError):
    """Gradle failed to list the tasks of the project."""


class VariantFilterError(KoverStepError):
    """The module/variant selection matched nothing."""


class ModuleNotFoundInProjectError(VariantFilterError):
    """The selected module is not part of the project."""


class VariantNotFoundError(VariantFilterError):
    """The selected variant is not present in any (selected) module."""


class DiscoveryError(KoverStepError):
    """Listing report artifacts failed."""


class ExportError(KoverStepError):
    """The export destination could not be prepared."""


class FileSystemError(KoverStepError):
    """A single file operation failed."""

    def __init__(
        self,
        message: str,
        path: Path,
        operation: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, context)
        self.path = path
        self.operation = operation


def create_file_error(
    path: Path,
    operation: str,
    error: Exception,
    context: dict[str, Any] | None = None,
) -> FileSystemError:
    """Build a FileSystemError describing a failed file operation."""
    message = f"{operation} failed for {path}: {error}"
    return FileSystemError(message, path=path, operation=operation, context=context)
