"""Core test fixtures for the Kover step."""

import logging
import os
import stat
from collections.abc import Generator
from pathlib import Path
from unittest.mock import Mock

import pytest
import structlog
from typer.testing import CliRunner

from koverstep.protocols import (
    CommandFactoryProtocol,
    ConsoleProtocol,
    FileAdapterProtocol,
)


# Task listing printed by the fake wrapper for `gradlew tasks --all`
TASKS_LISTING = """\
app:koverXmlReport - Task to generate XML coverage report for all variants
app:koverXmlReportDebug - Task to generate XML coverage report for 'debug'
app:koverXmlReportRelease - Task to generate XML coverage report for 'release'
lib:koverXmlReportDebug - Task to generate XML coverage report for 'debug'
app:testDebugUnitTest - Run unit tests for the debug build.
"""

# Fake Gradle wrapper: lists tasks, or writes Kover reports for the requested
# module:koverXmlReport<Variant> tasks and records its arguments.
FAKE_GRADLEW = """\
#!/bin/sh
if [ "$1" = "tasks" ]; then
cat <<'TASKS'
{listing}TASKS
exit ${{FAKE_GRADLE_TASKS_EXIT:-0}}
fi
echo "$@" > invocation.txt
for task in "$@"; do
  case "$task" in
    *:koverXmlReport*)
      module="${{task%%:*}}"
      variant="${{task#*:koverXmlReport}}"
      mkdir -p "$module/build/reports/kover/html$variant"
      echo "<html></html>" > "$module/build/reports/kover/html$variant/index.html"
      mkdir -p "$module/build/reports/kover/xml$variant"
      echo "<report/>" > "$module/build/reports/kover/xml$variant/report.xml"
      ;;
  esac
done
exit ${{FAKE_GRADLE_EXIT:-0}}
"""


# ---- Base Fixtures ----


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_console() -> Mock:
    """Create a mock console recording every printed line."""
    return Mock(spec=ConsoleProtocol)


@pytest.fixture
def mock_file_adapter() -> Mock:
    """Create a mock file adapter for testing."""
    adapter = Mock(spec=FileAdapterProtocol)
    adapter.exists.return_value = False
    return adapter


@pytest.fixture
def mock_command_factory() -> Mock:
    """Create a mock command factory for testing."""
    return Mock(spec=CommandFactoryProtocol)


# ---- Project Fixtures ----


def write_fake_gradlew(project_dir: Path, listing: str = TASKS_LISTING) -> Path:
    """Write an executable fake gradlew into ``project_dir``."""
    wrapper = project_dir / "gradlew"
    wrapper.write_text(FAKE_GRADLEW.format(listing=listing))
    wrapper.chmod(wrapper.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return wrapper


@pytest.fixture
def gradle_project(tmp_path: Path) -> Path:
    """A project directory with an executable fake gradlew."""
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    write_fake_gradlew(project_dir)
    return project_dir


@pytest.fixture
def step_env(
    gradle_project: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> dict[str, Path]:
    """Step inputs pointing at the fake project, exported to the environment."""
    for name in (
        "variant",
        "module",
        "arguments",
        "cache_level",
        "is_debug",
        "report_path_pattern",
        "result_path_pattern",
        "BITRISE_TEST_RESULT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(name.upper(), raising=False)

    paths = {
        "project": gradle_project,
        "deploy": tmp_path / "deploy",
        "test_results": tmp_path / "test_results",
    }
    monkeypatch.setenv("project_location", str(gradle_project))
    monkeypatch.setenv("BITRISE_DEPLOY_DIR", str(paths["deploy"]))
    return paths


# ---- Test Isolation Fixtures ----


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Keep logging configuration from leaking between tests."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def in_tmp_cwd(tmp_path: Path) -> Generator[Path, None, None]:
    """Run the test with the temporary directory as working directory."""
    original = Path.cwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original)
