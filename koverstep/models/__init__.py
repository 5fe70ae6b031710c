"""Data models for the Kover step."""

from .artifact import Artifact, ExportRecord
from .base import KoverBaseModel
from .results import StepResult


__all__ = ["Artifact", "ExportRecord", "KoverBaseModel", "StepResult"]
