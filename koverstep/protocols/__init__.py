"""Protocol definitions for Kover step adapters.

The protocols use typing.Protocol with @runtime_checkable so both static type
checkers and isinstance() checks accept alternative implementations.
"""

from .command_protocol import CommandFactoryProtocol, CommandProtocol
from .console_protocol import ConsoleProtocol
from .file_adapter_protocol import FileAdapterProtocol


__all__ = [
    "CommandFactoryProtocol",
    "CommandProtocol",
    "ConsoleProtocol",
    "FileAdapterProtocol",
]
