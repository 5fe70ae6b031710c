"""File adapter for abstracting file system operations."""

import os
import shutil
import tempfile
import zipfile
from pathlib import Path

from koverstep.core.errors import FileSystemError, create_file_error
from koverstep.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)


class FileSystemAdapter:
    """Local file system implementation of FileAdapterProtocol."""

    def exists(self, path: Path) -> bool:
        """Check if a path exists.

        Unlike Path.exists(), errors other than "not found" are reported.
        """
        try:
            path.stat()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise create_file_error(path, "stat", e) from e
        return True

    def touch_time(self, directory: Path) -> float:
        """Modification time a file created in ``directory`` gets right now.

        Filesystems stamp entries from a coarser clock than ``time.time()``,
        so an entry created after a ``time.time()`` reading can still look
        older than it.
        """
        try:
            with tempfile.NamedTemporaryFile(
                dir=directory, prefix=".koverstep-"
            ) as marker:
                return os.fstat(marker.fileno()).st_mtime
        except OSError as e:
            raise create_file_error(directory, "touch_time", e) from e

    def mkdir(self, path: Path, parents: bool = True, exist_ok: bool = True) -> None:
        try:
            logger.debug("creating_directory", path=str(path))
            path.mkdir(parents=parents, exist_ok=exist_ok)
        except OSError as e:
            raise create_file_error(
                path, "mkdir", e, {"parents": parents, "exist_ok": exist_ok}
            ) from e

    def copy_file(self, src: Path, dst: Path) -> None:
        try:
            self.mkdir(dst.parent)

            logger.debug("copying_file", source=str(src), destination=str(dst))
            shutil.copy2(src, dst)
        except FileSystemError:
            raise
        except OSError as e:
            raise create_file_error(
                src, "copy_file", e, {"source": str(src), "destination": str(dst)}
            ) from e

    def create_zip(self, src: Path, dst: Path) -> None:
        """Zip ``src`` into the new file ``dst``; an existing ``dst`` is an error."""
        context = {"source": str(src), "destination": str(dst)}
        self.mkdir(dst.parent)

        logger.debug("creating_zip", **context)
        try:
            zip_file = zipfile.ZipFile(dst, "x", zipfile.ZIP_DEFLATED)
        except OSError as e:
            raise create_file_error(dst, "create_zip", e, context) from e

        try:
            with zip_file:
                zip_file.write(src, src.name)
                if src.is_dir():
                    for file_path in sorted(src.rglob("*")):
                        zip_file.write(file_path, file_path.relative_to(src.parent))
        except (OSError, zipfile.BadZipFile) as e:
            dst.unlink(missing_ok=True)
            raise create_file_error(src, "create_zip", e, context) from e


def create_file_adapter() -> FileSystemAdapter:
    """Create a file adapter instance."""
    return FileSystemAdapter()
