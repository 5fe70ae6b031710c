"""Command adapter for running child processes."""

import os
import shlex
import subprocess
from collections.abc import Mapping
from pathlib import Path

from koverstep.core.structlog_logger import get_struct_logger
from koverstep.utils.stream_process import (
    CaptureOutputMiddleware,
    OutputMiddleware,
    ProcessResult,
    run_command,
)


logger = get_struct_logger(__name__)


class Command:
    """A child process invocation bound to a working directory and environment."""

    def __init__(
        self,
        name: str,
        args: list[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.name = name
        self.args = list(args)
        self.cwd = cwd
        self.env = env

    @property
    def argv(self) -> list[str]:
        return [self.name, *self.args]

    def printable_form(self) -> str:
        return shlex.join(self.argv)

    def run(self) -> int:
        """Run with inherited stdin/stdout/stderr and return the exit status."""
        logger.debug("command_run", command=self.printable_form(), cwd=str(self.cwd))
        completed = subprocess.run(
            self.argv,
            cwd=self.cwd,
            env=dict(self.env) if self.env is not None else None,
            check=False,
        )
        logger.debug("command_finished", returncode=completed.returncode)
        return completed.returncode

    def run_and_capture(
        self, middleware: OutputMiddleware[str] | None = None
    ) -> ProcessResult[str]:
        """Run while capturing output through the streaming helper."""
        logger.debug(
            "command_run_captured", command=self.printable_form(), cwd=str(self.cwd)
        )
        return run_command(
            self.argv,
            middleware=middleware or CaptureOutputMiddleware(),
            cwd=self.cwd,
            env=self.env,
        )

    def __repr__(self) -> str:
        return f"Command({self.printable_form()!r}, cwd={self.cwd!r})"


class CommandFactory:
    """Create commands sharing one environment."""

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self.env = env

    def create(self, name: str, *args: str, cwd: Path | None = None) -> Command:
        return Command(name, list(args), cwd=cwd, env=self.env)


def create_command_factory(env: Mapping[str, str] | None = None) -> CommandFactory:
    """Create a command factory.

    Args:
        env: Environment passed to every child; a snapshot of the current
            process environment when None

    Returns:
        CommandFactory: New command factory instance
    """
    return CommandFactory(dict(os.environ) if env is None else env)
