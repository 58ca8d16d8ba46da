"""Draw a parsed transcript with a UI implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agent_transcript.transcript import classify_working_item

if TYPE_CHECKING:
    from agent_transcript.transcript import ParsedAgentOutput
    from agent_transcript.ui.base import UI


def render_output(
    ui: UI,
    parsed: ParsedAgentOutput | None,
    raw_text: str = "",
    show_thinking: bool = False,
) -> None:
    """Render a parsed transcript, or the raw text when it could not be parsed.

    Args:
        ui: UI implementation for output
        parsed: Result of parse_agent_transcript, None for unstructured text
        raw_text: Transcript text shown verbatim when parsed is None
        show_thinking: Expand the thinking block instead of summarising it
    """
    if parsed is None:
        ui.raw(raw_text)
        return

    if parsed.working:
        ui.channel_header("WORK", "Working")
        for entry in parsed.working:
            item = classify_working_item(entry)
            ui.badge_line(item.badge.value if item.badge else None, item.text)
        ui.channel_footer("WORK", "Working")

    if parsed.commands:
        lines = [f"- {run.summary()}" for run in parsed.commands]
        ui.panel("TOOL", "Commands", "\n".join(lines))

    if parsed.user_instructions:
        ui.panel("USER", "User instructions", parsed.user_instructions)

    if parsed.thinking:
        if show_thinking:
            ui.channel_header("THINK", "Thinking")
            for line in parsed.thinking.splitlines():
                ui.stream_line("THINK", line)
            ui.channel_footer("THINK", "Thinking")
        else:
            line_count = len(parsed.thinking.splitlines())
            ui.info(f"[thinking hidden: {line_count} lines, use --show-thinking]")

    if parsed.answer:
        ui.panel("AI", parsed.agent or "Answer", parsed.answer)

    _render_footer(ui, parsed)


def _render_footer(ui: UI, parsed: ParsedAgentOutput) -> None:
    if parsed.command:
        ui.kv("Command", parsed.command)
    if parsed.model:
        ui.kv("Model", parsed.model)
    for key, value in parsed.meta.items():
        if key != "model":
            ui.kv(key.capitalize(), value)
    if parsed.tokens_used is not None:
        ui.kv("Tokens", f"{parsed.tokens_used:,}")
    if parsed.success is True:
        ui.ok("Command completed successfully")
    elif parsed.success is False:
        ui.err("Command completed with errors")
