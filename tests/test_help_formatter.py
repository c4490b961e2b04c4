from __future__ import annotations

import argparse
from io import StringIO

from rich.console import Console

from itpl.help_formatter import ITPL_HELP, CommandHelp, RichHelpFormatter, help_formatter_factory


def _parser(formatter_class) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="itpl", description="Test program", formatter_class=formatter_class)
    parser.add_argument("-e", action="store_true", help="Escape shell characters")
    return parser


class TestCommandHelp:
    def test_empty_defaults(self) -> None:
        help_content = CommandHelp()

        assert help_content.examples == []
        assert help_content.tips == []

    def test_itpl_help_content(self) -> None:
        assert len(ITPL_HELP.examples) > 0
        assert len(ITPL_HELP.tips) > 0
        assert all(command.startswith("itpl") for _, command in ITPL_HELP.examples)


class TestRichHelpFormatter:
    def test_formatter_initialization(self) -> None:
        formatter = RichHelpFormatter(prog="itpl")

        assert formatter._examples == []
        assert formatter._tips == []

    def test_formatter_with_custom_width(self) -> None:
        formatter = RichHelpFormatter(prog="itpl", width=80)

        assert formatter._width == 80

    def test_add_examples_and_tips(self) -> None:
        formatter = RichHelpFormatter(prog="itpl")
        formatter.add_examples([("List", "itpl")])
        formatter.add_tips(["Quote names"])

        assert formatter._examples == [("List", "itpl")]
        assert formatter._tips == ["Quote names"]

    def test_non_tty_falls_back_to_plain_help(self) -> None:
        console = Console(file=StringIO(), force_terminal=False)

        def _factory(prog: str) -> RichHelpFormatter:
            formatter = RichHelpFormatter(prog=prog, console=console)
            formatter.add_examples([("List", "itpl")])
            return formatter

        help_output = _parser(_factory).format_help()

        assert "usage: itpl" in help_output
        assert "Escape shell characters" in help_output
        assert "examples:" not in help_output

    def test_terminal_output_includes_examples_and_tips(self) -> None:
        console = Console(file=StringIO(), force_terminal=True)

        def _factory(prog: str) -> RichHelpFormatter:
            formatter = RichHelpFormatter(prog=prog, console=console)
            formatter.add_examples([("List every playlist", "itpl")])
            formatter.add_tips(["Quote playlist names"])
            return formatter

        help_output = _parser(_factory).format_help()

        assert "usage: itpl" in help_output
        assert "List every playlist" in help_output
        assert "Quote playlist names" in help_output

    def test_usage_stays_plain_on_terminal(self) -> None:
        console = Console(file=StringIO(), force_terminal=True)

        def _factory(prog: str) -> RichHelpFormatter:
            formatter = RichHelpFormatter(prog=prog, console=console)
            formatter.add_examples([("List every playlist", "itpl")])
            return formatter

        usage = _parser(_factory).format_usage()

        assert usage.startswith("usage: itpl")
        assert "List every playlist" not in usage

    def test_factory_attaches_help_content(self) -> None:
        formatter = help_formatter_factory(CommandHelp(examples=[("x", "itpl x")], tips=["t"]))("itpl")

        assert formatter._examples == [("x", "itpl x")]
        assert formatter._tips == ["t"]
