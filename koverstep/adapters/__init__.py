"""Adapters package for external system interfaces."""

from koverstep.protocols import (
    CommandFactoryProtocol,
    CommandProtocol,
    FileAdapterProtocol,
)

from .command_adapter import Command, CommandFactory, create_command_factory
from .file_adapter import FileSystemAdapter, create_file_adapter


__all__ = [
    "Command",
    "CommandFactory",
    "CommandFactoryProtocol",
    "CommandProtocol",
    "FileAdapterProtocol",
    "FileSystemAdapter",
    "create_command_factory",
    "create_file_adapter",
]
