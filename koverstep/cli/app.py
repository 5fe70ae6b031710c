"""Command line entry point of the Android Kover step."""

import logging
import sys
from importlib.metadata import distribution
from typing import Annotated

import typer

from koverstep.adapters import create_command_factory
from koverstep.cli.decorators.error_handling import handle_errors
from koverstep.cli.helpers.theme import TableStyles, ThemedConsole
from koverstep.config import StepConfig, load_step_config
from koverstep.core.logging import setup_logging
from koverstep.services import KOVER_TASK, create_step_orchestrator


__all__ = ["app", "main", "__version__"]


__version__ = distribution("android-kover-step").version

logger = logging.getLogger(__name__)


class AppContext:
    """Application context for storing shared state."""

    def __init__(self, no_emoji: bool = False, log_file: str | None = None):
        self.no_emoji = no_emoji
        self.log_file = log_file
        self.console = ThemedConsole(icon_mode=self.icon_mode)

    @property
    def icon_mode(self) -> str:
        return "text" if self.no_emoji else "emoji"


app = typer.Typer(
    name="android-kover-step",
    help=f"""Android Kover step v{__version__}

Runs the Gradle koverXmlReport task for the selected module and variant,
zips the HTML and XML coverage reports into $BITRISE_DEPLOY_DIR and hands
the XML results to the test addon.

Inputs are read from the environment (project_location, variant, module,
arguments, cache_level, is_debug, ...).

The step definition always invokes `run`; without a command only this help
is shown.""",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Also log to file as JSON")
    ] = None,
    no_emoji: Annotated[
        bool,
        typer.Option("--no-emoji", help="Disable emoji icons in output"),
    ] = False,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """Android Kover step."""
    if version:
        print(f"android-kover-step v{__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit()

    ctx.obj = AppContext(no_emoji=no_emoji, log_file=log_file)
    setup_logging(log_file=log_file)


def _load_config(app_context: AppContext) -> StepConfig:
    """Load the inputs, apply the debug flag and print the inputs table."""
    config = load_step_config()
    if config.is_debug:
        setup_logging(log_level_name="DEBUG", log_file=app_context.log_file)

    table = TableStyles.create_config_table(app_context.icon_mode)
    for name, value in config.display_items():
        table.add_row(name, value)
    app_context.console.print_table(table)
    app_context.console.print_blank()
    return config


@app.command()
@handle_errors
def run(ctx: typer.Context) -> None:
    """Run the Kover task and export its reports."""
    app_context: AppContext = ctx.obj
    config = _load_config(app_context)

    orchestrator = create_step_orchestrator(
        config, app_context.console, create_command_factory()
    )
    result = orchestrator.run()

    if result.exit_code != 0:
        raise typer.Exit(result.exit_code)


@app.command()
@handle_errors
def variants(ctx: typer.Context) -> None:
    """List the Kover report variants and show which ones are selected."""
    app_context: AppContext = ctx.obj
    config = _load_config(app_context)

    orchestrator = create_step_orchestrator(
        config, app_context.console, create_command_factory()
    )
    project = orchestrator.open_project()
    orchestrator.select_variants(project.get_task(KOVER_TASK))


def main() -> int:
    """Main CLI entry point."""
    try:
        app()
        exit_code = 0
    except SystemExit as e:
        exit_code = e.code if isinstance(e.code, int) else 0
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        exit_code = 1

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
