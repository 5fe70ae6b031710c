"""Run a child process while handing each output line to a middleware.

Used for commands whose output the step needs to read, such as the Gradle
task listing and ``envman``. Both pipes are drained concurrently so a chatty
stderr cannot block the child.

Example:
    ```python
    from koverstep.utils.stream_process import run_command

    return_code, stdout, stderr = run_command(
        ["./gradlew", "tasks", "--all"], cwd=project_dir
    )
    ```
"""

import shlex
import subprocess
from collections.abc import Mapping
from pathlib import Path
from threading import Thread
from typing import IO, Generic, TypeAlias, TypeVar, cast

from koverstep.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)

T = TypeVar("T")

# (return_code, stdout lines, stderr lines)
ProcessResult: TypeAlias = tuple[int, list[T], list[T]]


class OutputMiddleware(Generic[T]):
    """Turns raw output lines into captured values.

    Returning None from ``process`` drops the line from the result.
    """

    def process(self, line: str, stream_type: str) -> T | None:
        """Handle one line without its trailing newline.

        Args:
            line: Output line
            stream_type: "stdout" or "stderr"
        """
        raise NotImplementedError()


class CaptureOutputMiddleware(OutputMiddleware[str]):
    """Keep every line; stderr lines are also logged at debug level."""

    def process(self, line: str, stream_type: str) -> str:
        if stream_type == "stderr":
            logger.debug("process_stderr", line=line)
        return line


def _drain(
    pipe: IO[str],
    stream_type: str,
    middleware: OutputMiddleware[T],
    sink: list[T],
) -> None:
    with pipe:
        for raw_line in pipe:
            processed = middleware.process(raw_line.rstrip("\r\n"), stream_type)
            if processed is not None:
                sink.append(processed)


def run_command(
    cmd: str | list[str],
    middleware: OutputMiddleware[T] | None = None,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> ProcessResult[T]:
    """Run ``cmd`` to completion, capturing its output through ``middleware``.

    Args:
        cmd: Argument list, or a string split with shell quoting rules
        middleware: Line processor, CaptureOutputMiddleware when None
        cwd: Working directory of the child
        env: Complete child environment, inherited when None

    Returns:
        ProcessResult: Exit status with the processed stdout and stderr lines

    Raises:
        OSError: If the executable cannot be started
    """
    if middleware is None:
        middleware = cast(OutputMiddleware[T], CaptureOutputMiddleware())

    argv = shlex.split(cmd) if isinstance(cmd, str) else list(cmd)
    captured: dict[str, list[T]] = {"stdout": [], "stderr": []}

    with subprocess.Popen(
        argv,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        bufsize=1,
        cwd=cwd,
        env=dict(env) if env is not None else None,
    ) as process:
        readers = [
            Thread(
                target=_drain,
                args=(pipe, stream_type, middleware, captured[stream_type]),
                daemon=True,
            )
            for stream_type, pipe in (
                ("stdout", process.stdout),
                ("stderr", process.stderr),
            )
        ]
        for reader in readers:
            reader.start()
        return_code = process.wait()
        for reader in readers:
            reader.join()

    logger.debug("process_finished", argv=argv[:2], return_code=return_code)
    return return_code, captured["stdout"], captured["stderr"]
