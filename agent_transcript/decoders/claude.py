"""Claude stream-json decoder producing CLI transcript markup."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from agent_transcript.decoders.base import FeedResult, OutputMode
from agent_transcript.events import (
    ClaudeAssistant,
    ClaudeResult,
    ClaudeSystem,
    ClaudeUser,
    ContentPart,
    TextPart,
    ToolResultPart,
    ToolUsePart,
    parse_claude_event,
)
from agent_transcript.extractor import JsonObjectExtractor
from agent_transcript.transcript import ANSWER_MARKER, SEPARATOR, WORKING_MARKER

logger = logging.getLogger(__name__)

STREAM_COMMAND = "stream-json"
DESCRIPTION_JOIN = " — "
_LINE_BREAKS_RE = re.compile(r"\n+")


def format_tool_use(part: ToolUsePart) -> str:
    """Render a tool invocation as ``name: command — description``."""
    if part.command:
        label = part.command
        if part.description:
            label += f"{DESCRIPTION_JOIN}{part.description}"
    else:
        label = part.description
    return f"• {part.name}: {label}"


@dataclass
class ClaudeState:
    """One-shot section flags and the model seen so far."""

    header_printed: bool = False
    meta_printed: bool = False
    working_printed: bool = False
    model: str | None = None


class ClaudeDecoder:
    """Decode concatenated Claude stream-json objects into transcript markup.

    Each call returns only the text produced by that call; the caller
    appends it to what it already shows. The markup follows the grammar of
    CLI agent transcripts so :func:`parse_agent_transcript` reads both.
    """

    def __init__(self, agent: str = "claude") -> None:
        self._agent = agent
        self.state = ClaudeState()
        self._extractor = JsonObjectExtractor()

    @property
    def agent(self) -> str:
        return self._agent

    @property
    def mode(self) -> OutputMode:
        return OutputMode.APPEND

    @property
    def model(self) -> str | None:
        return self.state.model

    def feed(self, chunk: str) -> FeedResult:
        """Consume a chunk holding zero or more (partial) JSON objects."""
        delta = "".join(
            self._handle_event(value) for value in self._extractor.feed_values(chunk)
        )
        return FeedResult(delta, OutputMode.APPEND)

    def push(self, chunk: str) -> FeedResult:
        return self.feed(chunk)

    def flush(self) -> FeedResult | None:
        pending = self._extractor.pending.strip()
        if pending:
            logger.debug("Discarding unterminated claude fragment: %.80s", pending)
        self._extractor.reset()
        return None

    def _ensure_header(self) -> str:
        if self.state.header_printed:
            return ""
        self.state.header_printed = True
        return f"Agent: {self._agent} | Command: {STREAM_COMMAND}\n{SEPARATOR}\n"

    def _ensure_meta(self) -> str:
        if self.state.meta_printed:
            return ""
        self.state.meta_printed = True
        if not self.state.model:
            return ""
        return f"model: {self.state.model}\n{SEPARATOR}\n"

    def _ensure_working_header(self) -> str:
        if self.state.working_printed:
            return ""
        self.state.working_printed = True
        return f"{WORKING_MARKER}\n"

    def _ensure_sections(self) -> str:
        return self._ensure_header() + self._ensure_meta() + self._ensure_working_header()

    def _handle_event(self, value: object) -> str:
        event = parse_claude_event(value)

        if isinstance(event, ClaudeSystem):
            if event.model:
                self.state.model = event.model
            return self._ensure_header() + self._ensure_meta()
        if isinstance(event, ClaudeAssistant):
            return self._ensure_sections() + "".join(
                self._render_assistant_part(part) for part in event.content
            )
        if isinstance(event, ClaudeUser):
            return self._ensure_sections() + "".join(
                self._render_user_part(part) for part in event.content
            )
        if isinstance(event, ClaudeResult):
            if not event.result:
                return ""
            return f"{SEPARATOR}\n{ANSWER_MARKER}\n{event.result}\n"

        logger.debug("Ignoring claude event type %r", event.type)
        return ""

    @staticmethod
    def _render_assistant_part(part: ContentPart) -> str:
        if isinstance(part, TextPart):
            lines = (line.strip() for line in _LINE_BREAKS_RE.split(part.text))
            return "".join(f"• {line}\n" for line in lines if line)
        if isinstance(part, ToolUsePart):
            return f"{format_tool_use(part)}\n"
        return ""

    @staticmethod
    def _render_user_part(part: ContentPart) -> str:
        if isinstance(part, ToolResultPart):
            output = (part.content or "").strip()
            if output:
                return f"• BashOutput: {output}\n"
        return ""
