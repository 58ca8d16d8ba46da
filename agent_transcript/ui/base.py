"""Base UI protocol for transcript output."""

from __future__ import annotations

from typing import Protocol


class UI(Protocol):
    """Protocol for terminal UI implementations."""

    def kv(self, key: str, value: str) -> None:
        """Display a key-value pair."""
        ...

    def panel(self, tag: str, title: str, content: str) -> None:
        """Display a titled panel block."""
        ...

    def info(self, text: str) -> None:
        """Display info message (dim)."""
        ...

    def ok(self, text: str) -> None:
        """Display success message (green)."""
        ...

    def err(self, text: str) -> None:
        """Display error message (red)."""
        ...

    def channel_header(self, channel: str, title: str = "") -> None:
        """Display channel header with optional title."""
        ...

    def channel_footer(self, channel: str, title: str = "") -> None:
        """Display channel footer."""
        ...

    def stream_line(self, tag: str, line: str) -> None:
        """Display a single prefixed line."""
        ...

    def badge_line(self, badge: str | None, text: str) -> None:
        """Display a working-log bullet with an optional badge."""
        ...

    def raw(self, text: str) -> None:
        """Display text verbatim, without styling."""
        ...
