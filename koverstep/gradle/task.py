"""A Gradle task and its per-variant invocations."""

from typing import TYPE_CHECKING

from koverstep.core.errors import VariantsFetchError
from koverstep.core.structlog_logger import get_struct_logger
from koverstep.gradle.variants import Variants, parse_variants
from koverstep.protocols import CommandProtocol


if TYPE_CHECKING:
    from koverstep.gradle.project import GradleProject


logger = get_struct_logger(__name__)

TASKS_ARGS = ["tasks", "--all", "--console=plain", "--quiet"]


class GradleTask:
    """A task such as ``koverXmlReport`` that exists once per variant."""

    def __init__(self, project: "GradleProject", name: str) -> None:
        self.project = project
        self.name = name

    def get_variants(self, *args: str) -> Variants:
        """List the variants this task is available for.

        Args:
            *args: Extra Gradle arguments, passed after the tasks listing flags

        Returns:
            Variants: Variants per module

        Raises:
            VariantsFetchError: If Gradle cannot list the tasks
        """
        command = self.project.create_command(*TASKS_ARGS, *args)
        logger.debug("fetching_variants", command=command.printable_form())

        try:
            return_code, stdout, stderr = command.run_and_capture()
        except OSError as e:
            raise VariantsFetchError(
                f"failed to run {command.printable_form()}: {e}"
            ) from e

        if return_code != 0:
            raise VariantsFetchError(
                f"{command.printable_form()} exited with status {return_code}: "
                + "\n".join(stderr[-20:]),
                {"return_code": return_code},
            )

        return parse_variants(self.name, "\n".join(stdout))

    def get_command(self, variants: Variants, *args: str) -> CommandProtocol:
        """Build the invocation running this task for every given variant.

        Args:
            variants: Selected variants per module
            *args: Extra Gradle arguments appended unchanged

        Returns:
            CommandProtocol: ``gradlew app:koverXmlReportDebug ... <args>``
        """
        tasks = []
        for module, module_variants in variants.items():
            prefix = f"{module}:" if module else ""
            for variant in module_variants:
                tasks.append(f"{prefix}{self.name}{variant}")

        return self.project.create_command(*tasks, *args)
