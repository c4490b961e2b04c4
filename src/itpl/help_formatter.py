from __future__ import annotations

import argparse
import shutil
from dataclasses import dataclass, field
from typing import List, Tuple

from rich.console import Console
from rich.text import Text


@dataclass
class CommandHelp:
    """Usage examples and tips shown below the argparse help."""

    examples: List[Tuple[str, str]] = field(default_factory=list)
    """List of (description, command) tuples."""

    tips: List[str] = field(default_factory=list)


ITPL_HELP = CommandHelp(
    examples=[
        ("List every playlist in the library", "itpl"),
        (
            "Paths of a playlist relative to the music folder, escaped for a shell",
            "itpl -r /Users/me/Music/ -e 'Road Trip'",
        ),
        (
            "NFC paths in double quotes, ready for an sftp batch file",
            "itpl -n --qd -p 'put ' 'Road Trip'",
        ),
        (
            "Read playlists from a Plex server instead of Library.xml",
            "itpl --plex-url http://plex:32400 --plex-token TOKEN 'Road Trip'",
        ),
    ],
    tips=[
        "Quote playlist names containing spaces",
        "Paths not starting with the -r base path are printed in full",
        "Use -d to see the raw metadata of every item in the playlist",
    ],
)


class RichHelpFormatter(argparse.HelpFormatter):
    """
    Argparse help formatter that renders section titles, examples and tips with Rich.

    Falls back to plain argparse output when the console is not a terminal.
    """

    def __init__(
        self,
        prog: str,
        indent_increment: int = 2,
        max_help_position: int = 24,
        width: int | None = None,
        console: Console | None = None,
    ) -> None:
        if width is None:
            terminal_size = shutil.get_terminal_size()
            width = min(terminal_size.columns, 120)

        super().__init__(
            prog=prog,
            indent_increment=indent_increment,
            max_help_position=max_help_position,
            width=width,
        )

        self.console = console or Console()
        self._examples: list[tuple[str, str]] = []
        self._tips: list[str] = []
        self._has_sections = False

    def add_examples(self, examples: list[tuple[str, str]]) -> None:
        self._examples = list(examples)

    def add_tips(self, tips: list[str]) -> None:
        self._tips = list(tips)

    def start_section(self, heading: str | None) -> None:
        self._has_sections = True
        super().start_section(heading)

    def format_help(self) -> str:
        standard_help = super().format_help()

        # Usage-only output (argument errors) stays plain.
        if not self.console.is_terminal or not self._has_sections:
            return standard_help

        help_parts: list[str] = []
        for line in standard_help.split("\n"):
            if line and not line[0].isspace() and line.endswith(":"):
                help_parts.append(self._render_title(line[:-1]))
            else:
                help_parts.append(line)

        if self._examples:
            help_parts.append(self._render_examples())
        if self._tips:
            help_parts.append(self._render_tips())

        return "\n".join(help_parts).rstrip() + "\n"

    def _render_title(self, title: str) -> str:
        with self.console.capture() as capture:
            self.console.print(Text(f"{title}:", style="bold bright_cyan"), end="")
        return capture.get()

    def _render_examples(self) -> str:
        with self.console.capture() as capture:
            self.console.print(Text("examples:", style="bold bright_cyan"))
            for i, (description, command) in enumerate(self._examples, 1):
                desc_text = Text()
                desc_text.append(f"  {i}. ", style="dim cyan")
                desc_text.append(description, style="bright_white")
                self.console.print(desc_text)
                self.console.print(Text(f"     $ {command}", style="bright_yellow"))
        return capture.get()

    def _render_tips(self) -> str:
        with self.console.capture() as capture:
            self.console.print(Text("tips:", style="bold bright_cyan"))
            for tip in self._tips:
                tip_text = Text()
                tip_text.append("  - ", style="bright_yellow")
                tip_text.append(tip, style="bright_white")
                self.console.print(tip_text)
        return capture.get()


def help_formatter_factory(help_content: CommandHelp = ITPL_HELP):
    """Return a ``formatter_class`` callable that attaches ``help_content``."""

    def _factory(prog: str) -> RichHelpFormatter:
        formatter = RichHelpFormatter(prog=prog)
        formatter.add_examples(help_content.examples)
        formatter.add_tips(help_content.tips)
        return formatter

    return _factory
