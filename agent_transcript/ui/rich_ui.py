"""Rich-based terminal UI implementation."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.text import Text

if TYPE_CHECKING:
    from typing import TextIO

CHANNEL_COLORS = {
    "AI": "cyan",
    "USER": "green",
    "THINK": "magenta",
    "WORK": "yellow",
    "TOOL": "yellow",
}

BADGE_STYLES = {
    "AI": "bold cyan",
    "USER": "bold green",
    "THINK": "bold magenta",
    "WORK": "bold yellow",
    "TOOL": "bold yellow",
}

WORKING_BADGE_STYLES = {
    "created": "bold green",
    "modified": "bold yellow",
    "info": "bold blue",
}

LINE_STYLES = {
    "THINK": "dim",
}


class RichUI:
    """Rich-based terminal UI."""

    def __init__(
        self,
        no_color: bool = False,
        ascii_only: bool = False,
        file: TextIO | None = None,
        markdown: bool = True,
    ):
        self.no_color = no_color
        self.ascii_only = ascii_only
        self.markdown = markdown
        self._file = file or sys.stdout
        self.console = Console(
            file=self._file,
            no_color=no_color,
            highlight=False,
        )
        self._hr_char = "-" if ascii_only else "─"
        self._bullet = "*" if ascii_only else "•"
        self._block_left = "|" if ascii_only else "│"
        self._block_tl = "+" if ascii_only else "┌"
        self._block_tr = "+" if ascii_only else "┐"
        self._block_bl = "+" if ascii_only else "└"
        self._block_br = "+" if ascii_only else "┘"
        self._tag_width = max(len(tag) for tag in CHANNEL_COLORS)
        self._block_active = False

    def _format_tag(self, tag: str) -> str:
        """Pad tag to a stable width for alignment."""
        if len(tag) > self._tag_width:
            self._tag_width = len(tag)
        return tag.ljust(self._tag_width)

    def _badge_style(self, tag: str) -> str:
        """Return a style string for tag badges."""
        return BADGE_STYLES.get(tag, f"bold {CHANNEL_COLORS.get(tag, 'white')}")

    def _panel_box(self) -> box.Box:
        return box.ASCII if self.ascii_only else box.SQUARE

    def _block_header_line(self, label: str, style: str) -> Text:
        """Build a block header line with label."""
        label_text = f" {label} "
        width = self.console.size.width
        if width <= len(label_text) + 2:
            return Text(label_text, style=style)
        fill_len = width - len(label_text) - 2
        line = Text()
        line.append(self._block_tl, style="dim")
        line.append(label_text, style=style)
        line.append(self._hr_char * fill_len, style="dim")
        line.append(self._block_tr, style="dim")
        return line

    def _block_footer_line(self) -> Text:
        """Build a block footer line."""
        width = self.console.size.width
        if width <= 2:
            return Text(self._block_bl + self._block_br, style="dim")
        line = Text()
        line.append(self._block_bl, style="dim")
        line.append(self._hr_char * (width - 2), style="dim")
        line.append(self._block_br, style="dim")
        return line

    def kv(self, key: str, value: str) -> None:
        """Display a key-value pair."""
        padded_key = f"  {key}:".ljust(16)
        self.console.print(Text(padded_key, style="dim") + Text(value))

    def panel(self, tag: str, title: str, content: str) -> None:
        """Display a titled panel block."""
        label = f"{tag} · {title}" if title else tag
        title_text = Text(label, style=self._badge_style(tag))
        body = Markdown(content) if self.markdown and tag == "AI" else Text(content)
        self.console.print(
            Panel(
                body,
                title=title_text,
                border_style="dim",
                box=self._panel_box(),
                expand=True,
                padding=(0, 1),
            )
        )

    def info(self, text: str) -> None:
        """Display info message (dim)."""
        self.console.print(Text(text, style="dim"))

    def ok(self, text: str) -> None:
        """Display success message (green)."""
        self.console.print(Text(f"OK: {text}", style="green"))

    def err(self, text: str) -> None:
        """Display error message (red)."""
        self.console.print(Text(f"ERROR: {text}", style="red bold"))

    def channel_header(self, channel: str, title: str = "") -> None:
        """Display channel header with optional title."""
        full_title = f"{channel} · {title}" if title else channel
        self._block_active = True
        self.console.print(self._block_header_line(full_title, self._badge_style(channel)))

    def channel_footer(self, channel: str, title: str = "") -> None:
        """Display channel footer."""
        _ = channel
        _ = title
        self.console.print(self._block_footer_line())
        self._block_active = False

    def stream_line(self, tag: str, line: str) -> None:
        """Display a single prefixed line."""
        sep = "|" if self.ascii_only else "│"
        prefix = Text()
        if self._block_active:
            prefix.append(f"{self._block_left} ", style="dim")
        prefix.append(f"{self._format_tag(tag)} ", style=self._badge_style(tag))
        prefix.append(f"{sep} ", style="dim")
        prefix.append(line, style=LINE_STYLES.get(tag, ""))
        self.console.print(prefix)

    def badge_line(self, badge: str | None, text: str) -> None:
        """Display a working-log bullet with an optional badge."""
        line = Text()
        if self._block_active:
            line.append(f"{self._block_left} ", style="dim")
        line.append(f"{self._bullet} ", style="dim")
        if badge:
            line.append(f"{badge} ", style=WORKING_BADGE_STYLES.get(badge, "bold"))
        line.append(text)
        self.console.print(line)

    def raw(self, text: str) -> None:
        """Display text verbatim, without styling."""
        end = "" if text.endswith("\n") else "\n"
        self.console.print(text, markup=False, highlight=False, end=end, soft_wrap=True)
