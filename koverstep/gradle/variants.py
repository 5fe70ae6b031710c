"""Gradle variant catalog: parsing task listings and selecting variants."""

from typing import TypeAlias

from koverstep.core.errors import ModuleNotFoundInProjectError, VariantNotFoundError
from koverstep.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)

# module -> variants in first-seen order; "" is the root project
Variants: TypeAlias = dict[str, list[str]]


def parse_variants(task_name: str, tasks_output: str) -> Variants:
    """Collect the variants of ``task_name`` from ``gradlew tasks --all`` output.

    Lines look like ``app:koverXmlReportDebug - Task description``. The
    optional ``module:`` prefix selects the module, the rest after the task
    name is the variant. The bare task itself is not a variant.

    Args:
        task_name: Task whose variants are wanted, e.g. ``koverXmlReport``
        tasks_output: Raw task listing

    Returns:
        Variants: Variants per module
    """
    variants: Variants = {}

    for line in tasks_output.splitlines():
        line = line.strip()
        if not line:
            continue

        task = line.split(" ")[0]

        module = ""
        if ":" in task:
            module, _, task = task.rpartition(":")

        if not task.startswith(task_name):
            continue

        variant = task[len(task_name) :]
        if not variant:
            continue

        module_variants = variants.setdefault(module, [])
        if variant not in module_variants:
            module_variants.append(variant)

    logger.debug(
        "variants_parsed",
        task=task_name,
        modules=len(variants),
        variants=sum(len(v) for v in variants.values()),
    )
    return variants


def filter_variants(module: str, variant: str, variants: Variants) -> Variants:
    """Restrict ``variants`` to the selected module and variant.

    The module match is exact, the variant match ignores case; the variants
    keep the casing Gradle reported.

    Args:
        module: Module to keep, empty for all
        variant: Variant to keep, empty for all
        variants: All variants of the project

    Returns:
        Variants: The selected subset

    Raises:
        ModuleNotFoundInProjectError: If ``module`` is not in ``variants``
        VariantNotFoundError: If no module has ``variant``, or the project
            has no variants at all
    """
    if module:
        if module not in variants:
            raise ModuleNotFoundInProjectError(
                f"module not found: {module}", {"module": module}
            )
        variants = {module: variants[module]}

    if not variant:
        if not variants:
            raise VariantNotFoundError("no variants found in the project")
        return variants

    wanted = variant.lower()
    filtered: Variants = {}
    for module_name, module_variants in variants.items():
        for candidate in module_variants:
            if candidate.lower() == wanted:
                filtered.setdefault(module_name, []).append(candidate)

    if not filtered:
        raise VariantNotFoundError(
            f"variant {variant} not found in any module", {"variant": variant}
        )
    return filtered
