"""Protocol definition for file system operations used by exporters."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileAdapterProtocol(Protocol):
    """Protocol for file system operations."""

    def exists(self, path: Path) -> bool:
        """Check if a path exists.

        Raises:
            FileSystemError: If the path cannot be inspected
        """
        ...

    def touch_time(self, directory: Path) -> float:
        """Current time as the filesystem holding ``directory`` stamps entries.

        Raises:
            FileSystemError: If no file can be created in ``directory``
        """
        ...

    def mkdir(self, path: Path, parents: bool = True, exist_ok: bool = True) -> None:
        """Create a directory.

        Raises:
            FileSystemError: If directory cannot be created
        """
        ...

    def copy_file(self, src: Path, dst: Path) -> None:
        """Copy a file, creating the destination directory.

        Raises:
            FileSystemError: If file cannot be copied
        """
        ...

    def create_zip(self, src: Path, dst: Path) -> None:
        """Archive a file or a directory tree into a new zip file.

        Directory entries are stored under the directory's own name. An
        existing ``dst`` is never replaced.

        Raises:
            FileSystemError: If the archive cannot be written
        """
        ...
