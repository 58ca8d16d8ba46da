"""Plain text UI implementation (no Rich dependency)."""

from __future__ import annotations

import shutil
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import TextIO

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "bright_black": "\033[90m",
}

CHANNEL_COLORS = {
    "AI": "cyan",
    "USER": "green",
    "THINK": "magenta",
    "WORK": "yellow",
    "TOOL": "yellow",
}

BADGE_COLORS = {
    "created": "green",
    "modified": "yellow",
    "info": "blue",
}


class PlainUI:
    """Plain text UI with optional ANSI colors."""

    def __init__(
        self,
        no_color: bool = False,
        ascii_only: bool = False,
        file: TextIO | None = None,
    ):
        self.no_color = no_color
        self.ascii_only = ascii_only
        self._file = file or sys.stdout
        self._hr_char = "-" if ascii_only else "─"
        self._sep_char = "|" if ascii_only else "│"
        self._bullet = "*" if ascii_only else "•"
        self._block_left = "|" if ascii_only else "│"
        self._block_tl = "+" if ascii_only else "┌"
        self._block_tr = "+" if ascii_only else "┐"
        self._block_bl = "+" if ascii_only else "└"
        self._block_br = "+" if ascii_only else "┘"
        self._tag_width = max(len(tag) for tag in CHANNEL_COLORS)
        self._width = shutil.get_terminal_size(fallback=(80, 24)).columns
        self._block_active = False

    def _color(self, text: str, *styles: str) -> str:
        """Apply color codes if colors are enabled."""
        if self.no_color:
            return text
        prefix = "".join(COLORS.get(s, "") for s in styles)
        return f"{prefix}{text}{COLORS['reset']}" if prefix else text

    def _print(self, text: str = "") -> None:
        """Print to output file."""
        print(text, file=self._file)

    def _format_tag(self, tag: str) -> str:
        """Pad tag to a stable width for alignment."""
        if len(tag) > self._tag_width:
            self._tag_width = len(tag)
        return tag.ljust(self._tag_width)

    def _block_header_line(self, label: str) -> str:
        """Build a block header line with label."""
        label_text = f" {label} "
        width = max(self._width, len(label_text) + 2)
        fill_len = width - len(label_text) - 2
        return f"{self._block_tl}{label_text}{self._hr_char * fill_len}{self._block_tr}"

    def _block_footer_line(self) -> str:
        """Build a block footer line."""
        width = max(self._width, 2)
        return f"{self._block_bl}{self._hr_char * (width - 2)}{self._block_br}"

    def kv(self, key: str, value: str) -> None:
        """Display a key-value pair."""
        padded_key = f"  {key}:".ljust(16)
        self._print(f"{padded_key}{value}")

    def panel(self, tag: str, title: str, content: str) -> None:
        """Display a titled panel block."""
        label = f"{tag} · {title}" if title else tag
        self._print(self._block_header_line(label))
        for line in content.splitlines():
            self._print(f"{self._block_left} {line}")
        self._print(self._block_footer_line())

    def info(self, text: str) -> None:
        """Display info message (dim)."""
        self._print(self._color(text, "dim"))

    def ok(self, text: str) -> None:
        """Display success message (green)."""
        self._print(self._color(f"OK: {text}", "green"))

    def err(self, text: str) -> None:
        """Display error message (red)."""
        self._print(self._color(f"ERROR: {text}", "red", "bold"))

    def channel_header(self, channel: str, title: str = "") -> None:
        """Display channel header with optional title."""
        full_title = f"{channel} · {title}" if title else channel
        self._block_active = True
        self._print(self._block_header_line(full_title))

    def channel_footer(self, channel: str, title: str = "") -> None:
        """Display channel footer."""
        _ = channel
        _ = title
        self._block_active = False
        self._print(self._block_footer_line())

    def stream_line(self, tag: str, line: str) -> None:
        """Display a single prefixed line."""
        color = CHANNEL_COLORS.get(tag, "white")
        tag_label = self._format_tag(tag)
        block = f"{self._block_left} " if self._block_active else ""
        prefix = self._color(f"{block}{tag_label} {self._sep_char} ", color)
        if tag == "THINK":
            self._print(f"{prefix}{self._color(line, 'dim')}")
        else:
            self._print(f"{prefix}{line}")

    def badge_line(self, badge: str | None, text: str) -> None:
        """Display a working-log bullet with an optional badge."""
        block = f"{self._block_left} " if self._block_active else ""
        label = ""
        if badge:
            label = self._color(badge, BADGE_COLORS.get(badge, "white"), "bold") + " "
        self._print(f"{block}{self._bullet} {label}{text}")

    def raw(self, text: str) -> None:
        """Display text verbatim, without styling."""
        self._file.write(text)
        if text and not text.endswith("\n"):
            self._file.write("\n")
