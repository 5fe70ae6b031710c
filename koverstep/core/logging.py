"""Logging setup for the Kover step.

Step progress is written by the themed console; this module only configures
the diagnostic log stream. structlog events and plain stdlib records share
the same handlers: a human readable one on stdout and, optionally, a JSON
lines file for archiving next to the build logs.
"""

import logging
import shutil
import sys
from pathlib import Path
from typing import TextIO

import structlog
from rich.console import Console
from rich.traceback import Traceback
from structlog.typing import ExcInfo, Processor


DEBUG_TIME_FORMAT = "%H:%M:%S"
DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Gradle subprocess frames are never interesting in a traceback
SUPPRESSED_TRACEBACK_MODULES = ["typer", "subprocess"]


def _common_processors(log_level: int) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if log_level <= logging.DEBUG:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )
    return processors


def rich_traceback(sio: TextIO, exc_info: ExcInfo) -> None:
    """Render *exc_info* into *sio* with Rich."""
    width, _height = shutil.get_terminal_size((100, 40))
    sio.write("\n")
    Console(file=sio, color_system="truecolor").print(
        Traceback.from_exception(
            *exc_info,
            width=width,
            extra_lines=1,
            max_frames=5,
            suppress=SUPPRESSED_TRACEBACK_MODULES,
        )
    )


def _console_handler(log_level: int, stream: TextIO) -> logging.Handler:
    time_format = DEBUG_TIME_FORMAT if log_level <= logging.DEBUG else DEFAULT_TIME_FORMAT
    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[
                *_common_processors(log_level),
                structlog.processors.TimeStamper(fmt=time_format),
            ],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.dev.ConsoleRenderer(exception_formatter=rich_traceback),
            ],
        )
    )
    return handler


def _json_file_handler(log_level: int, log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8", delay=True)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[
                *_common_processors(log_level),
                structlog.processors.TimeStamper(fmt="iso"),
            ],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.dict_tracebacks,
                structlog.processors.JSONRenderer(),
            ],
        )
    )
    return handler


def setup_logging(
    log_level_name: str = "INFO",
    log_file: str | Path | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and the root logger for one step run.

    Safe to call again, e.g. once the configuration turned on debug mode;
    previous handlers are replaced.

    Args:
        log_level_name: Standard level name, unknown names mean INFO
        log_file: Optional JSON lines log file
        stream: Stream of the readable handler, stdout when None
    """
    log_level = getattr(logging, log_level_name.upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_common_processors(log_level),
            structlog.processors.TimeStamper(
                fmt=DEBUG_TIME_FORMAT if log_level <= logging.DEBUG else DEFAULT_TIME_FORMAT
            ),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers = [_console_handler(log_level, stream or sys.stdout)]
    if log_file:
        handlers.append(_json_file_handler(log_level, Path(log_file)))

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setLevel(log_level)
        root_logger.addHandler(handler)
    root_logger.setLevel(log_level)
