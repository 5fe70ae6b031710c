"""Configuration for the Kover step."""

from .step_config import (
    DEFAULT_HTML_PATTERN,
    DEFAULT_XML_PATTERN,
    CacheLevel,
    StepConfig,
    load_step_config,
)


__all__ = [
    "DEFAULT_HTML_PATTERN",
    "DEFAULT_XML_PATTERN",
    "CacheLevel",
    "StepConfig",
    "load_step_config",
]
