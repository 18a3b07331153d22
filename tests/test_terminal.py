"""Tests for terminal color detection and prompts."""

import io

from click.testing import CliRunner
from rich.console import Console

from dspbp_updater.cli.terminal import Terminal, supports_color


class FakeStream:
    def __init__(self, tty):
        self.tty = tty

    def isatty(self):
        return self.tty


def test_no_color_wins_over_force_color():
    env = {"NO_COLOR": "1", "FORCE_COLOR": "1"}
    assert not supports_color(env, platform="linux", stream=FakeStream(True))


def test_force_color_without_tty():
    assert supports_color({"FORCE_COLOR": "1"}, platform="linux", stream=FakeStream(False))


def test_dumb_terminal_disables_color():
    env = {"TERM": "dumb", "COLORTERM": "truecolor"}
    assert not supports_color(env, platform="linux", stream=FakeStream(True))


def test_known_color_terminals():
    for env in ({"WT_SESSION": "1"}, {"ConEmuANSI": "ON"}, {"COLORTERM": "truecolor"}):
        assert supports_color(env, platform="linux", stream=FakeStream(False))


def test_falls_back_to_tty_check():
    assert supports_color({}, platform="linux", stream=FakeStream(True))
    assert not supports_color({}, platform="linux", stream=FakeStream(False))


def test_select_returns_chosen_option():
    output = io.StringIO()
    terminal = Terminal(Console(file=output))

    with CliRunner().isolation(input="2\n"):
        selected = terminal.select("Choose an operation", ["Update", "Set mirror"])

    assert selected == "Set mirror"
    assert "1. Update" in output.getvalue()
    assert "2. Set mirror" in output.getvalue()


def test_select_uses_default_on_empty_input():
    terminal = Terminal(Console(file=io.StringIO()))

    with CliRunner().isolation(input="\n"):
        selected = terminal.select("Select a mirror", ["GitHub", "Codeberg"], default=1)

    assert selected == "Codeberg"


def test_confirm_reads_answer():
    terminal = Terminal(Console(file=io.StringIO()))

    with CliRunner().isolation(input="n\n"):
        assert terminal.confirm("Reset?") is False


def test_info_and_warn_print_plain_text_without_color():
    output = io.StringIO()
    terminal = Terminal(Console(file=output, color_system=None))

    terminal.info("Starting to update repository...")
    terminal.warn("Failed to fetch remote: [rejected]")

    assert output.getvalue().splitlines() == [
        "Starting to update repository...",
        "Failed to fetch remote: [rejected]",
    ]


def test_detected_color_forces_terminal_output():
    terminal = Terminal.from_environment({"FORCE_COLOR": "1"})

    assert terminal.console.is_terminal


def test_disabled_color_has_no_color_system():
    terminal = Terminal.from_environment({"NO_COLOR": "1"})

    assert terminal.console.color_system is None
