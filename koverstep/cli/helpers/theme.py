"""Console theme for step output."""

from rich.console import Console
from rich.table import Table
from rich.theme import Theme


class Colors:
    """Style names used across step output."""

    HEADER = "bold cyan"
    DONE = "green"
    WARNING = "yellow"
    ERROR = "bold red"
    KEY = "cyan"
    VALUE = "white"
    BORDER = "blue"


class Icons:
    """Message icons, with plain text stand-ins for ``--no-emoji``."""

    WARNING = "⚠️"
    ERROR = "❌"
    CONFIG = "⚙️"

    _TEXT = {
        "WARNING": "[WARN]",
        "ERROR": "[ERROR]",
        "CONFIG": "",
    }

    @classmethod
    def get_icon(cls, icon_name: str, icon_mode: str = "emoji") -> str:
        """Icon for ``icon_name`` in ``icon_mode`` ("emoji" or "text")."""
        if icon_mode == "emoji":
            return str(getattr(cls, icon_name, ""))
        return cls._TEXT.get(icon_name, "")


STEP_THEME = Theme(
    {
        "header": Colors.HEADER,
        "done": Colors.DONE,
        "warning": Colors.WARNING,
        "error": Colors.ERROR,
    }
)


class ThemedConsole:
    """The step's output sink.

    Created once by the CLI and handed to every component that reports
    progress. Text is printed verbatim, never parsed as Rich markup, since
    paths and Gradle arguments may contain brackets.
    """

    def __init__(self, icon_mode: str = "emoji", console: Console | None = None) -> None:
        if console is None:
            console = Console(theme=STEP_THEME)
        else:
            console.push_theme(STEP_THEME)
        self.console = console
        self.icon_mode = icon_mode

    def _print(self, message: str, style: str | None = None, icon: str = "") -> None:
        prefix = Icons.get_icon(icon, self.icon_mode) if icon else ""
        text = f"{prefix} {message}" if prefix else message
        self.console.print(text, style=style, markup=False, highlight=False)

    def print_header(self, message: str) -> None:
        """Section title such as ``Export HTML results:``."""
        self._print(message, style="header")

    def print_plain(self, message: str) -> None:
        self._print(message)

    def print_blank(self) -> None:
        self.console.print()

    def print_done(self, message: str) -> None:
        """Green line without icon, for selections and completed phases."""
        self._print(message, style="done")

    def print_warning(self, message: str) -> None:
        self._print(message, style="warning", icon="WARNING")

    def print_error(self, message: str) -> None:
        self._print(message, style="error", icon="ERROR")

    def print_table(self, table: Table) -> None:
        self.console.print(table)


class TableStyles:
    """Table layouts used by the CLI."""

    @staticmethod
    def create_config_table(icon_mode: str = "emoji") -> Table:
        """Two column table listing the step inputs."""
        icon = Icons.get_icon("CONFIG", icon_mode)
        table = Table(
            title=f"{icon} Configuration" if icon else "Configuration",
            header_style=Colors.HEADER,
            border_style=Colors.BORDER,
        )
        table.add_column("Input", style=Colors.KEY, no_wrap=True)
        table.add_column("Value", style=Colors.VALUE)
        return table
