"""Command line interface for the Android Kover step."""

from koverstep.cli.app import app, main


__all__ = ["app", "main"]
