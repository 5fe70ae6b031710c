"""Step services."""

from .orchestrator import KOVER_TASK, StepOrchestrator, create_step_orchestrator


__all__ = ["KOVER_TASK", "StepOrchestrator", "create_step_orchestrator"]
