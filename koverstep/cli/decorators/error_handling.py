"""Error handling decorators for CLI commands."""

from collections.abc import Callable
from functools import wraps
from typing import Any

import typer

from koverstep.core.errors import (
    ConfigError,
    KoverStepError,
    ProjectOpenError,
    VariantFilterError,
    VariantsFetchError,
)
from koverstep.core.structlog_logger import debug_enabled, get_struct_logger


__all__ = ["handle_errors"]

logger = get_struct_logger(__name__)

# Message prefixes naming the phase a fatal error happened in
ERROR_PHASES: list[tuple[type[KoverStepError], str]] = [
    (ConfigError, "Process config"),
    (ProjectOpenError, "Process config"),
    (VariantsFetchError, "Run"),
    (VariantFilterError, "Run"),
    (KoverStepError, "Export outputs"),
]


def _command_context(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
    ctx = kwargs.get("ctx")
    if ctx is None:
        ctx = next((a for a in args if isinstance(a, typer.Context)), None)
    return ctx


def _report(ctx: Any, message: str) -> None:
    console = getattr(getattr(ctx, "obj", None), "console", None)
    if console is not None:
        console.print_error(message)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator turning step errors into an error line and exit status 1.

    The line goes to the console held by the command's ``ctx.obj``.

    Args:
        func: The function to decorate

    Returns:
        Decorated function with error handling
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        exc_info = debug_enabled()
        try:
            return func(*args, **kwargs)
        except KoverStepError as e:
            phase = next(p for cls, p in ERROR_PHASES if isinstance(e, cls))
            _report(_command_context(args, kwargs), f"{phase}: {e}")
            logger.error(
                "step_failed",
                error=str(e),
                error_type=e.__class__.__name__,
                exc_info=exc_info,
                **e.context,
            )
            raise typer.Exit(1) from e
        except OSError as e:
            _report(
                _command_context(args, kwargs), f"Unexpected file system error: {e}"
            )
            logger.error("unexpected_os_error", error=str(e), exc_info=exc_info)
            raise typer.Exit(1) from e

    return wrapper
