"""Protocol for the human readable step output sink."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ConsoleProtocol(Protocol):
    """Where progress lines, warnings and errors of a step run are written."""

    def print_header(self, message: str) -> None:
        """Print a section header."""
        ...

    def print_plain(self, message: str) -> None:
        """Print a line without decoration."""
        ...

    def print_done(self, message: str) -> None:
        """Print a highlighted line without icon."""
        ...

    def print_warning(self, message: str) -> None:
        ...

    def print_error(self, message: str) -> None:
        ...

    def print_blank(self) -> None:
        ...
