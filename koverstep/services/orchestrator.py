"""Step orchestration: build, export reports, collect cache."""

import time
from collections.abc import Callable
from datetime import datetime
from functools import partial
from pathlib import Path

from koverstep.adapters import create_file_adapter
from koverstep.cache import GradleCacheCollector, create_cache_collector
from koverstep.config.step_config import StepConfig
from koverstep.core.errors import DiscoveryError, FileSystemError
from koverstep.core.structlog_logger import StructlogMixin
from koverstep.export import (
    ArtifactHarvester,
    DeployExporter,
    ExportDirResolver,
    TestAddonExporter,
    get_export_dir,
)
from koverstep.gradle import GradleProject, GradleTask, Variants, filter_variants
from koverstep.models.results import StepResult
from koverstep.protocols import (
    CommandFactoryProtocol,
    ConsoleProtocol,
    FileAdapterProtocol,
)


KOVER_TASK = "koverXmlReport"
XML_FILE_SUFFIX = "*.xml"


class StepOrchestrator(StructlogMixin):
    """Run the Kover report task and publish what it produced.

    Reports are exported even when the build fails, since they help diagnose
    the failure. The build cache is only refreshed after a successful build.
    """

    def __init__(
        self,
        config: StepConfig,
        console: ConsoleProtocol,
        command_factory: CommandFactoryProtocol,
        file_adapter: FileAdapterProtocol | None = None,
        cache_collector: GradleCacheCollector | None = None,
        export_dir_resolver: ExportDirResolver | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        super().__init__()
        self.config = config
        self.console = console
        self.command_factory = command_factory
        self.file_adapter = file_adapter or create_file_adapter()
        self.cache_collector = cache_collector or create_cache_collector(
            command_factory
        )
        self.export_dir_resolver = export_dir_resolver or partial(
            get_export_dir, source_dir=config.project_location
        )
        self.clock = clock or self.filesystem_time

    def open_project(self) -> GradleProject:
        """Open the configured Gradle project.

        Raises:
            ProjectOpenError: If the project cannot be opened
        """
        return GradleProject.open(self.config.project_location, self.command_factory)

    def filesystem_time(self) -> float:
        """Current time as the project's filesystem stamps new entries.

        Used as the build start, so reports written by the build are never
        older than it.
        """
        try:
            return self.file_adapter.touch_time(self.config.project_location)
        except FileSystemError as e:
            self.log_error_with_context("filesystem_time_failed", e)
            return time.time()

    def select_variants(self, task: GradleTask) -> Variants:
        """List the task's variants, print them and return the selected ones.

        Raises:
            VariantsFetchError: If Gradle cannot list the tasks
            VariantFilterError: If the selection matches nothing
        """
        self.console.print_header("Variants:")
        self.console.print_blank()

        variants = task.get_variants(*self.config.extra_args)
        filtered = filter_variants(self.config.module, self.config.variant, variants)

        for module, module_variants in variants.items():
            self.console.print_plain(f"{module}:")
            selected = filtered.get(module, [])
            for variant in module_variants:
                if variant in selected:
                    self.console.print_done(f"✓ {variant}")
                else:
                    self.console.print_plain(f"- {variant}")
        self.console.print_blank()

        return filtered

    def run(self) -> StepResult:
        """Run the whole step.

        Returns:
            StepResult: What was built and exported; ``exit_code`` is 1 when
            the build failed

        Raises:
            KoverStepError: On any fatal error
        """
        project = self.open_project()
        task = project.get_task(KOVER_TASK)
        filtered = self.select_variants(task)

        started = self.clock()
        result = StepResult(started=datetime.fromtimestamp(started))

        self._run_build(task, filtered, result)

        harvester = ArtifactHarvester(project, self.console)
        deploy_exporter = DeployExporter(
            self.config.deploy_dir, self.console, self.file_adapter
        )

        self.console.print_blank()
        self.console.print_header("Export HTML results:")
        self.console.print_blank()
        reports = harvester.harvest(
            self.config.report_path_pattern,
            started,
            include_module_name=True,
            directory_mode=True,
        )
        result.html_exports = deploy_exporter.export(reports)

        self.console.print_blank()
        self.console.print_header("Export XML results:")
        self.console.print_blank()
        results = harvester.harvest(
            self.config.result_path_pattern,
            started,
            include_module_name=True,
            directory_mode=True,
        )
        result.xml_exports = deploy_exporter.export(results)

        if self.config.test_result_dir is not None:
            self._export_test_addon(
                harvester, started, result, self.config.test_result_dir
            )

        if result.build_failed:
            self.logger.info("cache_collection_skipped", reason="build_failed")
            self.logger.debug("step_finished", result=result.to_dict())
            return result

        self.console.print_blank()
        self.console.print_header("Collecting cache:")
        warning = self.cache_collector.collect(
            self.config.project_location, self.config.cache_level
        )
        if warning:
            self.console.print_warning(warning)
            result.add_warning(warning)
        else:
            result.cache_collected = True
        self.console.print_done("  Done")

        self.logger.debug("step_finished", result=result.to_dict())
        return result

    def _run_build(self, task: GradleTask, filtered: Variants, result: StepResult) -> None:
        self.console.print_header("Run test:")
        command = task.get_command(filtered, *self.config.extra_args)

        self.console.print_blank()
        self.console.print_done(f"$ {command.printable_form()}")
        self.console.print_blank()

        try:
            result.build_exit_code = command.run()
        except OSError as e:
            result.build_error = str(e)

        if result.build_failed:
            error = result.build_error or f"exit status {result.build_exit_code}"
            self.console.print_error(f"Run: test task failed, error: {error}")
            self.logger.error("build_failed", error=error)

    def _export_test_addon(
        self,
        harvester: ArtifactHarvester,
        started: float,
        result: StepResult,
        output_dir: Path,
    ) -> None:
        self.console.print_blank()
        self.console.print_header("Export XML results for test addon:")
        self.console.print_blank()

        pattern = self.config.result_path_pattern
        if not pattern.endswith(XML_FILE_SUFFIX):
            pattern += XML_FILE_SUFFIX

        try:
            result_xmls = harvester.harvest(
                pattern, started, include_module_name=False, directory_mode=False
            )
        except DiscoveryError as e:
            warning = f"Failed to find test XML test results, error: {e}"
            self.console.print_warning(warning)
            result.add_warning(warning)
            return

        exporter = TestAddonExporter(
            output_dir,
            self.console,
            self.file_adapter,
            self.export_dir_resolver,
        )
        result.test_addon_exports = exporter.export(result_xmls)


def create_step_orchestrator(
    config: StepConfig,
    console: ConsoleProtocol,
    command_factory: CommandFactoryProtocol,
) -> StepOrchestrator:
    """Create an orchestrator for one step run."""
    return StepOrchestrator(config, console, command_factory)
