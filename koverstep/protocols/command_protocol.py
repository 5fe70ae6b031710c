"""Protocol definitions for child process execution."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from koverstep.utils.stream_process import OutputMiddleware, ProcessResult


@runtime_checkable
class CommandProtocol(Protocol):
    """A prepared child process invocation."""

    def printable_form(self) -> str:
        """Shell escaped rendering of the command line, for logging."""
        ...

    def run(self) -> int:
        """Run synchronously with inherited standard streams.

        Returns:
            Exit status of the child process
        """
        ...

    def run_and_capture(
        self, middleware: OutputMiddleware[str] | None = None
    ) -> ProcessResult[str]:
        """Run synchronously, capturing output lines.

        Returns:
            Tuple containing (return_code, stdout_lines, stderr_lines)
        """
        ...


@runtime_checkable
class CommandFactoryProtocol(Protocol):
    """The one shell execution context of a step run."""

    def create(self, name: str, *args: str, cwd: Path | None = None) -> CommandProtocol:
        """Prepare a command.

        Args:
            name: Executable name or path
            *args: Arguments passed unchanged
            cwd: Working directory of the child process

        Returns:
            A command ready to run
        """
        ...
