"""Kover step - Android code-coverage report export for Bitrise builds."""

from importlib.metadata import distribution

from .models.artifact import Artifact, ExportRecord
from .models.results import StepResult


__version__ = distribution("android-kover-step").version

__all__ = [
    "Artifact",
    "ExportRecord",
    "StepResult",
    "__version__",
]
