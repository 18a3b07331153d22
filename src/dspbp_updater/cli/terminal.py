"""Console styling and interactive prompts."""

import os
import sys
from typing import Mapping, Optional, Sequence

import click
from rich.console import Console
from rich.style import Style
from rich.text import Text

from dspbp_updater.cli.progress import ConsoleProgress

INFO_STYLE = Style(color="bright_white", bgcolor="blue")
WARN_STYLE = Style(color="bright_red", bgcolor="black", bold=True)

ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004
STD_OUTPUT_HANDLE = -11


def enable_windows_ansi() -> bool:
    """Turn on ANSI escape processing for the Windows console."""
    if sys.platform != "win32":
        return False

    import ctypes
    from ctypes import wintypes

    kernel32 = ctypes.windll.kernel32
    handle = kernel32.GetStdHandle(STD_OUTPUT_HANDLE)
    mode = wintypes.DWORD()
    if not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
        return False
    return bool(
        kernel32.SetConsoleMode(handle, mode.value | ENABLE_VIRTUAL_TERMINAL_PROCESSING)
    )


def supports_color(
    environ: Optional[Mapping[str, str]] = None,
    platform: str = sys.platform,
    stream=None,
) -> bool:
    """Decide whether to emit colors based on the environment.

    ``NO_COLOR`` wins over ``FORCE_COLOR``. On Windows the console is switched
    to virtual terminal mode when possible.
    """
    env = os.environ if environ is None else environ
    if env.get("NO_COLOR"):
        return False
    if env.get("FORCE_COLOR"):
        return True
    if platform == "win32" and enable_windows_ansi():
        return True
    if env.get("TERM") == "dumb":
        return False
    if env.get("WT_SESSION") or env.get("ConEmuANSI") == "ON" or env.get("COLORTERM"):
        return True
    if platform == "win32":
        return False

    stream = stream if stream is not None else sys.stdout
    return hasattr(stream, "isatty") and stream.isatty()


class Terminal:
    """Styled output and prompts for the interactive updater."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "Terminal":
        if supports_color(environ):
            console = Console(force_terminal=True)
        else:
            console = Console(color_system=None, no_color=True)
        return cls(console)

    def info(self, message: str) -> None:
        self.console.print(Text(message, style=INFO_STYLE))

    def warn(self, message: str) -> None:
        self.console.print(Text(message, style=WARN_STYLE))

    def select(self, title: str, options: Sequence[str], default: int = 0) -> str:
        """Show a numbered menu and return the chosen option."""
        self.console.print(Text(title, style="bold"))
        for number, option in enumerate(options, start=1):
            self.console.print(Text(f"  {number}. {option}"))
        choice = click.prompt(
            "Enter a number",
            type=click.IntRange(1, len(options)),
            default=default + 1,
        )
        return options[choice - 1]

    def confirm(self, question: str, default: bool = True) -> bool:
        return click.confirm(question, default=default)

    def wait_for_key(self) -> None:
        self.info("Press any key to exit...")
        # Returns immediately when stdin is not a terminal
        click.pause(info="")

    def progress(self) -> ConsoleProgress:
        return ConsoleProgress(self.console)
