"""Register Gradle caches with the Bitrise build cache."""

import os
from collections.abc import Mapping
from pathlib import Path

from koverstep.config.step_config import CacheLevel
from koverstep.core.structlog_logger import StructlogMixin
from koverstep.protocols import CommandFactoryProtocol


CACHE_INCLUDE_PATHS_KEY = "BITRISE_CACHE_INCLUDE_PATHS"
CACHE_EXCLUDE_PATHS_KEY = "BITRISE_CACHE_EXCLUDE_PATHS"

DEPENDENCY_PATHS = [
    "~/.gradle/caches",
    "~/.gradle/wrapper",
    "~/.m2",
    "~/.android/build-cache",
]

DEPENDENCY_EXCLUDES = [
    "~/.gradle/**/*.lock",
    "~/.gradle/**/*.bin",
    "~/.gradle/**/gc.properties",
    "~/.gradle/**/journal-1/**",
    "~/.gradle/daemon/**",
    "~/.gradle/caches/*/plugin-resolution/**",
    "~/.gradle/caches/*/fileHashes/**",
    "~/.gradle/caches/*/javaCompile/**",
]

BUILD_FILES = ("build.gradle", "build.gradle.kts")


class GradleCacheCollector(StructlogMixin):
    """Collect cacheable Gradle paths after a successful build.

    Paths are appended to the newline separated include/exclude lists that
    the Bitrise cache steps read, using ``envman`` to export them.
    """

    def __init__(
        self,
        command_factory: CommandFactoryProtocol,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__()
        self.command_factory = command_factory
        self.environ = os.environ if environ is None else environ

    def collect(self, project_root: Path, level: CacheLevel | str) -> str | None:
        """Collect cache paths for ``project_root``.

        Args:
            project_root: Gradle workspace
            level: How much to cache

        Returns:
            str | None: A warning when the paths could not be registered
        """
        level = CacheLevel(level)
        if level == CacheLevel.NONE:
            self.logger.debug("cache_collection_disabled")
            return None

        include_paths, exclude_paths = self.cache_paths(project_root, level)
        self.logger.debug(
            "cache_paths_collected",
            level=level.value,
            include=include_paths,
            exclude=exclude_paths,
        )

        for key, paths in (
            (CACHE_INCLUDE_PATHS_KEY, include_paths),
            (CACHE_EXCLUDE_PATHS_KEY, exclude_paths),
        ):
            warning = self._append_env(key, paths)
            if warning:
                return warning
        return None

    def cache_paths(
        self, project_root: Path, level: CacheLevel
    ) -> tuple[list[str], list[str]]:
        """Include and exclude paths for ``level``."""
        include_paths = list(DEPENDENCY_PATHS)
        exclude_paths = list(DEPENDENCY_EXCLUDES)

        if level == CacheLevel.ALL:
            project_root = project_root.resolve()
            include_paths.append(str(project_root / ".gradle"))
            include_paths.extend(str(p) for p in self.module_build_dirs(project_root))
            exclude_paths.append(str(project_root / ".gradle" / "**" / "*.lock"))

        return include_paths, exclude_paths

    def module_build_dirs(self, project_root: Path) -> list[Path]:
        """``build`` directories sitting next to a Gradle build script."""
        build_dirs = []
        for dirpath, dirnames, filenames in os.walk(project_root):
            # Do not descend into outputs or Gradle's own state
            dirnames[:] = [
                d for d in dirnames if d != "build" and not d.startswith(".")
            ]
            if any(name in filenames for name in BUILD_FILES):
                build_dir = Path(dirpath) / "build"
                if build_dir.is_dir():
                    build_dirs.append(build_dir)
        return sorted(build_dirs)

    def _append_env(self, key: str, paths: list[str]) -> str | None:
        existing = self.environ.get(key, "")
        value = "\n".join([existing, *paths]) if existing else "\n".join(paths)

        command = self.command_factory.create(
            "envman", "add", "--key", key, "--value", value
        )
        try:
            return_code, _stdout, stderr = command.run_and_capture()
        except OSError as e:
            return f"Failed to export {key}: {e}"
        if return_code != 0:
            return f"Failed to export {key}: " + "\n".join(stderr)
        return None


def create_cache_collector(
    command_factory: CommandFactoryProtocol,
) -> GradleCacheCollector:
    """Create a cache collector sharing the step's command factory."""
    return GradleCacheCollector(command_factory)
