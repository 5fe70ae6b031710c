"""structlog helpers shared by the step's components."""

import logging
from typing import Any

import structlog


def get_struct_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Logger for module ``name``; pass ``__name__``.

    Event names are snake_case, details go in key/value pairs:

        logger.debug("variants_parsed", task="koverXmlReport", modules=2)
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]


def debug_enabled() -> bool:
    """Whether stack traces should accompany error events."""
    return logging.getLogger().isEnabledFor(logging.DEBUG)


class StructlogMixin:
    """Gives a class a ``logger`` carrying ``component=<ClassName>``."""

    _bound_logger: structlog.stdlib.BoundLogger | None = None

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        if self._bound_logger is None:
            self._bound_logger = get_struct_logger(type(self).__module__).bind(
                component=type(self).__name__
            )
        return self._bound_logger

    def log_error_with_context(
        self, event: str, error: Exception, **context: Any
    ) -> None:
        """Log ``error`` under ``event``; the traceback is added in debug mode."""
        self.logger.error(
            event,
            error=str(error),
            error_type=type(error).__name__,
            exc_info=debug_enabled(),
            **context,
        )
