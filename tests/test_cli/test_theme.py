"""Tests for the themed console."""

from io import StringIO

from rich.console import Console

from koverstep.cli.helpers import Icons, TableStyles, ThemedConsole
from koverstep.protocols import ConsoleProtocol


def make_console(icon_mode: str = "emoji") -> tuple[ThemedConsole, StringIO]:
    buffer = StringIO()
    console = Console(file=buffer, width=200, color_system=None)
    return ThemedConsole(icon_mode=icon_mode, console=console), buffer


class TestThemedConsole:
    """Test ThemedConsole output."""

    def test_implements_console_protocol(self):
        themed, _ = make_console()

        assert isinstance(themed, ConsoleProtocol)

    def test_messages_are_not_markup(self):
        """Paths with brackets are printed verbatim."""
        themed, buffer = make_console()

        themed.print_plain("  Export [ ./app/build => $BITRISE_DEPLOY_DIR/app.zip ]")

        assert buffer.getvalue() == (
            "  Export [ ./app/build => $BITRISE_DEPLOY_DIR/app.zip ]\n"
        )

    def test_text_icons(self):
        themed, buffer = make_console(icon_mode="text")

        themed.print_warning("Retrying without modtime check....")
        themed.print_error("failed")

        assert buffer.getvalue().splitlines() == [
            "[WARN] Retrying without modtime check....",
            "[ERROR] failed",
        ]

    def test_emoji_icons(self):
        themed, buffer = make_console()

        themed.print_error("failed")

        assert buffer.getvalue().startswith(Icons.ERROR)

    def test_config_table(self):
        themed, buffer = make_console(icon_mode="text")
        table = TableStyles.create_config_table("text")
        table.add_row("variant", "debug")

        themed.print_table(table)

        output = buffer.getvalue()
        assert "Configuration" in output
        assert "variant" in output
        assert "debug" in output

    def test_injected_console_gets_step_styles(self):
        """A console created elsewhere still knows the step's style names."""
        buffer = StringIO()
        console = Console(file=buffer, width=200, force_terminal=True)
        themed = ThemedConsole(icon_mode="text", console=console)

        themed.print_header("Variants:")
        themed.print_done("✓ debug")
        themed.print_warning("careful")
        themed.print_error("failed")

        output = buffer.getvalue()
        assert "Variants:" in output
        assert "[ERROR] failed" in output
        assert "\x1b[" in output
