"""Gradle project access: tasks, variants and report discovery."""

from .matcher import MatchMode, PathMatcher
from .project import GradleProject
from .task import GradleTask
from .variants import Variants, filter_variants, parse_variants


__all__ = [
    "GradleProject",
    "GradleTask",
    "MatchMode",
    "PathMatcher",
    "Variants",
    "filter_variants",
    "parse_variants",
]
