"""Tests for transcript rendering."""

from __future__ import annotations

import io
import sys

from agent_transcript import parse_agent_transcript
from agent_transcript.ui import PlainUI, RichUI, get_ui, render_output


class _TtyStringIO(io.StringIO):
    def isatty(self) -> bool:
        return True


def _plain(**kwargs) -> tuple[PlainUI, io.StringIO]:
    out = io.StringIO()
    return PlainUI(no_color=True, file=out, **kwargs), out


class TestRenderOutput:
    """Tests for render_output with the plain UI."""

    def test_full_transcript(self, codex_transcript: str) -> None:
        ui, out = _plain()
        render_output(ui, parse_agent_transcript(codex_transcript), codex_transcript)
        text = out.getvalue()
        assert "WORK · Working" in text
        assert "• Considering structured output" in text
        assert "AI · codex" in text
        assert "│ I’m doing well, thanks! How can I help you today?" in text
        assert "[thinking hidden: 1 lines, use --show-thinking]" in text
        assert "Model:" in text and "gpt-5" in text
        assert "Workdir:" in text
        assert "Tokens:" in text and "5,347" in text
        assert "OK: Command completed successfully" in text

    def test_sections_in_display_order(self, codex_transcript: str) -> None:
        ui, out = _plain()
        render_output(ui, parse_agent_transcript(codex_transcript), codex_transcript)
        text = out.getvalue()
        assert text.index("Working") < text.index("thinking hidden") < text.index("AI · codex")
        assert text.index("AI · codex") < text.index("Tokens:")

    def test_show_thinking(self, codex_transcript: str) -> None:
        ui, out = _plain()
        render_output(
            ui, parse_agent_transcript(codex_transcript), codex_transcript, show_thinking=True
        )
        assert "THINK │ I will reply concisely." in out.getvalue()

    def test_badges(self) -> None:
        text = "Working\n• Created app.py\n• Modified setup.cfg\n• Read notes.md\n"
        ui, out = _plain()
        render_output(ui, parse_agent_transcript(text), text)
        rendered = out.getvalue()
        assert "• created app.py" in rendered
        assert "• modified setup.cfg" in rendered
        assert "• info notes.md" in rendered

    def test_commands_panel(self) -> None:
        text = (
            "[2025-01-01T00:00:00] exec ls in /tmp\n"
            "[2025-01-01T00:00:01] ls succeeded in 3ms:\n"
            "a.txt\n"
        )
        ui, out = _plain()
        render_output(ui, parse_agent_transcript(text), text)
        assert "- ls · 3ms · ok · 1 lines" in out.getvalue()

    def test_failure(self) -> None:
        text = "❌ Command completed with errors"
        ui, out = _plain()
        render_output(ui, parse_agent_transcript(text), text)
        assert "ERROR: Command completed with errors" in out.getvalue()

    def test_unparsed_text_is_raw(self) -> None:
        ui, out = _plain()
        render_output(ui, None, "just text")
        assert out.getvalue() == "just text\n"

    def test_ascii_only(self, codex_transcript: str) -> None:
        ui, out = _plain(ascii_only=True)
        render_output(ui, parse_agent_transcript(codex_transcript), codex_transcript)
        text = out.getvalue()
        assert "* Considering structured output" in text
        assert "─" not in text
        assert "│" not in text


class TestRichUI:
    """Tests for the rich UI."""

    def test_renders_sections(self, codex_transcript: str) -> None:
        out = io.StringIO()
        ui = RichUI(no_color=True, file=out)
        render_output(ui, parse_agent_transcript(codex_transcript), codex_transcript)
        text = out.getvalue()
        assert "Considering structured output" in text
        assert "How can I help you today?" in text
        assert "5,347" in text

    def test_raw_text_is_not_markup(self) -> None:
        out = io.StringIO()
        ui = RichUI(no_color=True, file=out)
        ui.raw("[bold]literal[/bold]")
        assert out.getvalue() == "[bold]literal[/bold]\n"


class TestGetUI:
    """Tests for get_ui."""

    def test_plain_mode(self) -> None:
        assert isinstance(get_ui("plain"), PlainUI)

    def test_rich_mode(self) -> None:
        assert isinstance(get_ui("rich"), RichUI)

    def test_auto_without_tty_is_plain(self, monkeypatch) -> None:
        monkeypatch.setattr(sys, "stdout", io.StringIO())
        assert isinstance(get_ui("auto"), PlainUI)

    def test_auto_on_tty_is_rich(self, monkeypatch) -> None:
        monkeypatch.setattr(sys, "stdout", _TtyStringIO())
        assert isinstance(get_ui("auto"), RichUI)
