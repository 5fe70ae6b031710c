"""Tests for the Gradle project adapter and its tasks."""

import os
from pathlib import Path
from unittest.mock import Mock

import pytest

from koverstep.adapters import create_command_factory
from koverstep.core.errors import ProjectOpenError, VariantsFetchError
from koverstep.gradle import GradleProject
from koverstep.gradle.task import TASKS_ARGS


class TestGradleProjectOpen:
    """Test opening a project."""

    def test_open_valid_project(self, gradle_project):
        project = GradleProject.open(gradle_project, create_command_factory())

        assert project.location == gradle_project.resolve()
        assert project.wrapper == gradle_project.resolve() / "gradlew"

    def test_open_missing_directory(self, tmp_path):
        with pytest.raises(ProjectOpenError, match="not a directory"):
            GradleProject.open(tmp_path / "missing", create_command_factory())

    def test_open_without_wrapper(self, tmp_path):
        with pytest.raises(ProjectOpenError, match="no gradlew found"):
            GradleProject.open(tmp_path, create_command_factory())

    @pytest.mark.skipif(os.geteuid() == 0, reason="root can execute anything")
    def test_open_with_non_executable_wrapper(self, tmp_path):
        wrapper = tmp_path / "gradlew"
        wrapper.write_text("#!/bin/sh\n")
        wrapper.chmod(0o644)

        with pytest.raises(ProjectOpenError, match="is not executable"):
            GradleProject.open(tmp_path, create_command_factory())

    def test_create_command_runs_wrapper_in_project(self, gradle_project):
        factory = Mock()
        project = GradleProject.open(gradle_project, factory)

        project.create_command("tasks")

        factory.create.assert_called_once_with(
            str(gradle_project.resolve() / "gradlew"),
            "tasks",
            cwd=gradle_project.resolve(),
        )


class TestGradleTask:
    """Test variant listing and command building."""

    def test_get_variants_from_wrapper(self, gradle_project):
        """Variants come from the real wrapper output."""
        project = GradleProject.open(gradle_project, create_command_factory())

        variants = project.get_task("koverXmlReport").get_variants()

        assert variants == {"app": ["Debug", "Release"], "lib": ["Debug"]}

    def test_get_variants_passes_extra_args(self, gradle_project):
        factory = Mock()
        factory.create.return_value.run_and_capture.return_value = (0, [], [])
        project = GradleProject.open(gradle_project, factory)

        project.get_task("koverXmlReport").get_variants("--offline")

        args = factory.create.call_args.args
        assert list(args[1:]) == [*TASKS_ARGS, "--offline"]

    def test_get_variants_failure(self, gradle_project):
        """A failing listing raises VariantsFetchError."""
        factory = create_command_factory(
            {**os.environ, "FAKE_GRADLE_TASKS_EXIT": "3"}
        )
        project = GradleProject.open(gradle_project, factory)

        with pytest.raises(VariantsFetchError, match="exited with status 3"):
            project.get_task("koverXmlReport").get_variants()

    def test_get_variants_cannot_start(self, gradle_project):
        factory = Mock()
        factory.create.return_value.run_and_capture.side_effect = OSError("boom")
        project = GradleProject.open(gradle_project, factory)

        with pytest.raises(VariantsFetchError, match="boom"):
            project.get_task("koverXmlReport").get_variants()

    def test_get_command(self, gradle_project):
        """One task per selected variant, then the extra arguments."""
        project = GradleProject.open(gradle_project, create_command_factory())
        task = project.get_task("koverXmlReport")

        command = task.get_command(
            {"app": ["Debug", "Release"], "lib": ["Debug"]}, "--stacktrace"
        )

        assert command.argv == [
            str(project.wrapper),
            "app:koverXmlReportDebug",
            "app:koverXmlReportRelease",
            "lib:koverXmlReportDebug",
            "--stacktrace",
        ]
        assert command.cwd == project.location

    def test_get_command_root_module(self, gradle_project):
        """Root project tasks carry no module prefix."""
        project = GradleProject.open(gradle_project, create_command_factory())

        command = project.get_task("koverXmlReport").get_command({"": ["Debug"]})

        assert command.argv[1:] == ["koverXmlReportDebug"]

    def test_run_command_writes_reports(self, gradle_project):
        project = GradleProject.open(gradle_project, create_command_factory())
        command = project.get_task("koverXmlReport").get_command({"app": ["Debug"]})

        assert command.run() == 0
        assert (gradle_project / "app/build/reports/kover/htmlDebug/index.html").is_file()
        assert (gradle_project / "invocation.txt").read_text().strip() == (
            "app:koverXmlReportDebug"
        )


class TestGradleProjectDiscovery:
    """Test report discovery through the project."""

    def test_find_dirs_and_artifacts(self, gradle_project: Path):
        report_dir = gradle_project / "app/build/reports/kover/xmlDebug"
        report_dir.mkdir(parents=True)
        (report_dir / "report.xml").write_text("<report/>")
        project = GradleProject.open(gradle_project, create_command_factory())

        dirs = project.find_dirs(0, "*build/reports/kover/xml*", True)
        files = project.find_artifacts(0, "*build/reports/kover/xml**.xml", False)

        assert [d.name for d in dirs] == ["app-xmlDebug"]
        assert [f.name for f in files] == ["report.xml"]
