"""Locate report artifacts below a project root by path pattern."""

import fnmatch
import os
import stat
from enum import Enum
from pathlib import Path

from koverstep.core.errors import DiscoveryError
from koverstep.core.structlog_logger import get_struct_logger
from koverstep.models.artifact import Artifact


logger = get_struct_logger(__name__)


class MatchMode(str, Enum):
    """Kind of filesystem entry a pattern should select."""

    FILE = "file"
    DIRECTORY = "directory"


class PathMatcher:
    """Match filesystem entries below a root against a glob-like pattern.

    ``*`` matches any run of characters including path separators, so
    ``*build/reports/kover/html*`` finds report directories in every module.
    Relative patterns are matched against the path relative to the root,
    absolute patterns against the absolute path. Once a directory matches,
    its contents are not searched.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def find(
        self,
        pattern: str,
        modtime_floor: float = 0.0,
        mode: MatchMode = MatchMode.DIRECTORY,
        include_module_name: bool = False,
    ) -> list[Artifact]:
        """Find matching entries.

        Args:
            pattern: Glob-like pattern
            modtime_floor: POSIX timestamp; entries modified earlier are
                skipped. 0 disables the check.
            mode: Select regular files or directories
            include_module_name: Prefix the artifact name with its module

        Returns:
            list[Artifact]: Matches sorted by path

        Raises:
            DiscoveryError: If the tree cannot be listed
        """
        logger.debug(
            "path_match_started",
            root=str(self.root),
            pattern=pattern,
            modtime_floor=modtime_floor,
            mode=MatchMode(mode).value,
        )

        matches: list[Artifact] = []
        for dirpath, dirnames, filenames in os.walk(
            self.root, onerror=self._raise_walk_error
        ):
            current = Path(dirpath)

            if mode == MatchMode.DIRECTORY:
                for dirname in list(dirnames):
                    path = current / dirname
                    entry = self._lstat(path)
                    if entry is None or not stat.S_ISDIR(entry.st_mode):
                        continue
                    if not self._matches(pattern, path):
                        continue
                    if modtime_floor and entry.st_mtime < modtime_floor:
                        continue
                    matches.append(self._artifact(path, True, include_module_name))
                    dirnames.remove(dirname)
            else:
                for filename in filenames:
                    path = current / filename
                    entry = self._lstat(path)
                    if entry is None or not stat.S_ISREG(entry.st_mode):
                        continue
                    if not self._matches(pattern, path):
                        continue
                    if modtime_floor and entry.st_mtime < modtime_floor:
                        continue
                    matches.append(self._artifact(path, False, include_module_name))

        matches.sort(key=lambda artifact: str(artifact.path))
        logger.debug("path_match_finished", pattern=pattern, count=len(matches))
        return matches

    def artifact_name(self, path: Path, include_module_name: bool) -> str:
        """Name proposed for exporting ``path``.

        The module is the first path segment below the root, e.g.
        ``app/build/reports/kover/htmlDebug`` becomes ``app-htmlDebug``.
        """
        name = path.name
        if include_module_name:
            parts = path.relative_to(self.root).parts
            if len(parts) > 1:
                name = f"{parts[0]}-{name}"
        return name

    def _artifact(self, path: Path, is_dir: bool, include_module_name: bool) -> Artifact:
        return Artifact(
            path=path,
            name=self.artifact_name(path, include_module_name),
            is_dir=is_dir,
        )

    def _matches(self, pattern: str, path: Path) -> bool:
        if os.path.isabs(pattern):
            candidate = path.as_posix()
        else:
            candidate = path.relative_to(self.root).as_posix()
        return fnmatch.fnmatchcase(candidate, pattern)

    def _lstat(self, path: Path) -> os.stat_result | None:
        try:
            return path.lstat()
        except FileNotFoundError:
            # Removed while walking
            return None
        except OSError as e:
            raise DiscoveryError(
                f"Failed to stat {path}: {e}", {"path": str(path)}
            ) from e

    @staticmethod
    def _raise_walk_error(error: OSError) -> None:
        if isinstance(error, FileNotFoundError):
            logger.debug("path_match_missing", path=error.filename)
            return
        raise DiscoveryError(
            f"Failed to list {error.filename}: {error}", {"path": error.filename}
        ) from error
