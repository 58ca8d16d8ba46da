"""UI module for transcript terminal output."""

from agent_transcript.ui.base import UI
from agent_transcript.ui.plain import PlainUI
from agent_transcript.ui.render import render_output
from agent_transcript.ui.rich_ui import RichUI

__all__ = ["UI", "RichUI", "PlainUI", "get_ui", "render_output"]


def get_ui(
    mode: str = "auto",
    no_color: bool = False,
    ascii_only: bool = False,
) -> UI:
    """Get appropriate UI implementation based on mode and environment."""
    import sys

    normalized = (mode or "auto").strip().lower()

    if normalized in {"plain", "off", "no", "0"}:
        return PlainUI(no_color=no_color, ascii_only=ascii_only)

    # auto or rich mode
    is_tty = sys.stdout.isatty()
    if normalized == "auto" and not is_tty:
        return PlainUI(no_color=no_color, ascii_only=ascii_only)
    return RichUI(no_color=no_color, ascii_only=ascii_only)
