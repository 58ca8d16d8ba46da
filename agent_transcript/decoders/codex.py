"""Codex JSON event stream decoder."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field

from agent_transcript.decoders.base import FeedResult, OutputMode
from agent_transcript.events import (
    AgentMessage,
    CodexItem,
    CommandExecution,
    FileChange,
    Ignored,
    ItemError,
    ItemEvent,
    McpToolCall,
    Reasoning,
    ResponseCompleted,
    ResponseDelta,
    ResponseError,
    StreamError,
    ThreadStarted,
    TodoList,
    TurnCompleted,
    TurnStarted,
    Usage,
    WebSearch,
    parse_codex_event,
)
from agent_transcript.lines import CodexLineAccumulator, normalize_sse_line

logger = logging.getLogger(__name__)

STATUS_GLYPHS = {
    "completed": "✅",
    "failed": "❌",
}
PENDING_GLYPH = "⏳"
CHANGE_GLYPHS = {
    "add": "➕",
    "delete": "➖",
}
MODIFY_GLYPH = "✏️"
TODO_DONE = "✅"
TODO_OPEN = "⬜"
SEARCH_GLYPH = "\U0001f50d"
ERROR_GLYPH = "❌"
DEFAULT_ERROR = "Codex encountered an error."

# Characters that end or split a markdown link target.
_LINK_TARGET_ESCAPES = str.maketrans({" ": "%20", "(": "%28", ")": "%29"})


def status_glyph(status: str) -> str:
    return STATUS_GLYPHS.get(status, PENDING_GLYPH)


def file_link(path: str) -> str:
    """Render a path as a markdown link with a file:// target."""
    return f"[{path}](file://{path.translate(_LINK_TARGET_ESCAPES)})"


def format_usage(usage: Usage) -> str:
    """Render the trailing token summary block."""
    cached = (
        f", {usage.cached_input_tokens:,} cached" if usage.cached_input_tokens > 0 else ""
    )
    return (
        f"\n---\n**Tokens:** {usage.total:,} total "
        f"({usage.input_tokens:,} in, {usage.output_tokens:,} out{cached})"
    )


def format_item(item: CodexItem) -> str | None:
    """Render one thread item as a message block (reasoning excluded)."""
    if isinstance(item, AgentMessage):
        return item.text
    if isinstance(item, CommandExecution):
        block = f"{status_glyph(item.status)} **Command:** `{item.command}`"
        if item.aggregated_output:
            block += f"\n```\n{item.aggregated_output}\n```"
        return block
    if isinstance(item, FileChange):
        lines = [f"{status_glyph(item.status)} **File Changes:**"]
        for change in item.changes:
            glyph = CHANGE_GLYPHS.get(change.kind, MODIFY_GLYPH)
            lines.append(f"{glyph} {file_link(change.path)}")
        return "\n".join(lines)
    if isinstance(item, McpToolCall):
        return f"{status_glyph(item.status)} **Tool Call:** {item.server}/{item.tool}"
    if isinstance(item, WebSearch):
        return f"{SEARCH_GLYPH} **Web Search:** {item.query}"
    if isinstance(item, TodoList):
        lines = ["**Todo List:**"]
        lines.extend(
            f"{TODO_DONE if todo.completed else TODO_OPEN} {todo.text}" for todo in item.items
        )
        return "\n".join(lines)
    if isinstance(item, ItemError):
        return f"{ERROR_GLYPH} **Error:** {item.message}"
    return None


@dataclass
class CodexState:
    """Everything accumulated from one Codex run."""

    reasoning: list[str] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)
    usage: Usage | None = None
    thread_id: str | None = None


class CodexDecoder:
    """Decode Codex thread events into a markdown transcript.

    Every call that changes visible state returns the whole transcript
    rebuilt from accumulated state; the caller replaces what it shows.
    """

    def __init__(self, agent: str = "codex") -> None:
        self._agent = agent
        self.state = CodexState()
        self._lines = CodexLineAccumulator()

    @property
    def agent(self) -> str:
        return self._agent

    @property
    def mode(self) -> OutputMode:
        return OutputMode.REPLACE

    @property
    def thread_id(self) -> str | None:
        return self.state.thread_id

    def feed(self, line: str) -> FeedResult | None:
        """Consume one line of Codex output (plain JSON or ``data:`` framed)."""
        payload = normalize_sse_line(line)
        if payload is None:
            return None

        try:
            value = json.loads(payload)
        except json.JSONDecodeError:
            logger.debug("Skipping non-JSON codex line: %.80s", payload)
            return None

        return self._handle_event(value)

    def push(self, chunk: str) -> FeedResult | None:
        """Consume an arbitrary stdout chunk, splitting it into lines first."""
        result: FeedResult | None = None
        for payload in self._lines.push(chunk):
            result = self.feed(payload) or result
        return result

    def flush(self) -> FeedResult | None:
        payload = self._lines.flush()
        if payload is None:
            return None
        return self.feed(payload)

    def render(self) -> str:
        """Rebuild the transcript from accumulated state."""
        parts = [f"_{text}_" for text in self.state.reasoning]
        parts.extend(self.state.messages)
        if self.state.usage is not None:
            parts.append(format_usage(self.state.usage))
        return "\n\n".join(parts)

    def _rebuild(self) -> FeedResult:
        return FeedResult(self.render(), OutputMode.REPLACE)

    def _handle_event(self, value: object) -> FeedResult | None:
        event = parse_codex_event(value)

        if isinstance(event, ThreadStarted):
            self.state.thread_id = event.thread_id
            return None
        if isinstance(event, TurnCompleted):
            if event.usage is None:
                return None
            self.state.usage = event.usage
            return self._rebuild()
        if isinstance(event, (TurnStarted, StreamError, ResponseDelta)):
            return None
        if isinstance(event, ItemEvent):
            return self._handle_item(event.item)
        if isinstance(event, ResponseCompleted):
            if not event.text:
                return None
            self.state.messages.append(event.text)
            return self._rebuild()
        if isinstance(event, ResponseError):
            self.state.messages.append(f"{ERROR_GLYPH} Error: {event.message or DEFAULT_ERROR}")
            return self._rebuild()

        logger.debug("Ignoring codex event type %r", event.type)
        return None

    def _handle_item(self, item: CodexItem) -> FeedResult | None:
        if isinstance(item, Reasoning):
            self.state.reasoning.append(item.text)
            return self._rebuild()
        if isinstance(item, Ignored):
            logger.debug("Ignoring codex item type %r", item.type)
            return None

        block = format_item(item)
        if block is None:
            return None
        self.state.messages.append(block)
        return self._rebuild()
