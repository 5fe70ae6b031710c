"""Utility helpers for the Kover step."""

from .stream_process import (
    CaptureOutputMiddleware,
    OutputMiddleware,
    ProcessResult,
    run_command,
)


__all__ = [
    "CaptureOutputMiddleware",
    "OutputMiddleware",
    "ProcessResult",
    "run_command",
]
