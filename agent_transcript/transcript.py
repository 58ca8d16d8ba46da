"""Parse CLI agent transcript markup into structured display sections.

The markup is the line-oriented text printed by CLI agents (and synthesized
by the Claude decoder)::

    Agent: codex | Command: how are you?
    [2025-09-04T00:48:13] OpenAI Codex v0.23.0 (research preview)
    --------
    workdir: /tmp/ws
    model: gpt-5
    --------
    [2025-09-04T00:48:12]
    Working
    • Considering structured output
    --------
    [2025-09-04T00:48:17] thinking
    I will reply concisely.
    [2025-09-04T00:48:18] codex
    I'm doing well, thanks!
    [2025-09-04T00:48:19] tokens used: 5347
    ✅ Command completed successfully

Every section is optional. The parser is called again on each new chunk of
a growing transcript, so it never raises and a missing or malformed section
only leaves the matching field unset.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

SEPARATOR = "--------"
WORKING_MARKER = "Working"
ANSWER_MARKER = "Answer"
THINKING_LABEL = "thinking"
SUCCESS_GLYPH = "✅"
FAILURE_GLYPH = "❌"

KNOWN_AGENTS = frozenset({"claude", "codex", "gemini", "test"})

HEADER_RE = re.compile(r"^Agent:\s*(?P<agent>[^|]*?)\s*\|\s*Command:\s*(?P<command>.*)$")
SEPARATOR_RE = re.compile(r"^-{8,}$")
TIMESTAMP_RE = re.compile(r"^\[(?P<ts>\d{4}-\d{2}-\d{2}[^\]]*)\]\s*(?P<rest>.*)$")
META_RE = re.compile(r"^(?P<key>[A-Za-z][^:]{0,39}):\s+(?P<value>.+)$")
TOKENS_RE = re.compile(r"^tokens used\b:?\s*(?P<value>.*)$", re.IGNORECASE)
TOKEN_VALUE_RE = re.compile(r"^([0-9][0-9,]*)\b")
BANNER_RE = re.compile(
    r"^(?P<glyph>[✅❌])\s*(?P<text>.*\b(?:completed|command failed|process error)\b.*)$",
    re.IGNORECASE,
)
INSTRUCTIONS_RE = re.compile(r"^user instructions:?\s*(?P<inline>.*)$", re.IGNORECASE)
BULLET_RE = re.compile(r"^[•|]\s*")
EXEC_RE = re.compile(r"^exec\s+(?P<cmd>.+?)(?:\s+in\s+(?P<cwd>\S+))?$")
EXEC_RESULT_RE = re.compile(
    r"^(?:exec\s+)?(?P<cmd>.+?)(?:\s+in\s+\S+)?\s+"
    r"(?P<status>succeeded|failed|exited\s+-?\d+)\s+in\s+(?P<duration>[0-9.]+(?:ms|s))"
)

EXEC_STATUS_MAP = {
    "succeeded": "ok",
    "failed": "fail",
}


@dataclass(frozen=True)
class TranscriptHeader:
    """The ``Agent: ... | Command: ...`` line."""

    agent: str | None
    command: str | None


@dataclass(frozen=True)
class CommandRun:
    """Summary of one ``exec`` block in a Codex CLI transcript."""

    command: str
    status: str = "unknown"
    duration: str | None = None
    output_lines: int = 0

    def summary(self, max_len: int = 80) -> str:
        parts = [_truncate(self.command, max_len)]
        if self.duration:
            parts.append(self.duration)
        if self.status != "unknown":
            parts.append(self.status)
        if self.output_lines == 0:
            parts.append("no output")
        else:
            parts.append(f"{self.output_lines} lines")
        return " · ".join(parts)


@dataclass(frozen=True)
class ParsedAgentOutput:
    """Structured sections recovered from a transcript.

    A fresh record is built on every parse; fields are None (or empty) when
    the matching section was absent.
    """

    header: TranscriptHeader | None = None
    meta: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    working: tuple[str, ...] = ()
    user_instructions: str | None = None
    thinking: str | None = None
    answer: str | None = None
    tokens_used: int | None = None
    success: bool | None = None
    commands: tuple[CommandRun, ...] = ()

    @property
    def agent(self) -> str | None:
        return self.header.agent if self.header else None

    @property
    def command(self) -> str | None:
        return self.header.command if self.header else None

    @property
    def model(self) -> str | None:
        return self.meta.get("model")

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable view of the record."""
        return {
            "header": (
                {"agent": self.header.agent, "command": self.header.command}
                if self.header
                else None
            ),
            "meta": dict(self.meta),
            "working": list(self.working),
            "userInstructions": self.user_instructions,
            "thinking": self.thinking,
            "answer": self.answer,
            "tokensUsed": self.tokens_used,
            "success": self.success,
            "commands": [
                {
                    "command": run.command,
                    "status": run.status,
                    "duration": run.duration,
                    "outputLines": run.output_lines,
                }
                for run in self.commands
            ],
        }


class Badge(str, Enum):
    CREATED = "created"
    MODIFIED = "modified"
    INFO = "info"


@dataclass(frozen=True)
class WorkingItem:
    """A working-log entry split into an optional badge and display text."""

    badge: Badge | None
    text: str


_BADGE_PREFIXES = (
    (re.compile(r"^(created|added)", re.IGNORECASE), Badge.CREATED),
    (re.compile(r"^(modified|updated|changed)", re.IGNORECASE), Badge.MODIFIED),
    (re.compile(r"^(read|scanned)", re.IGNORECASE), Badge.INFO),
)
_BADGE_STRIP_RE = re.compile(
    r"^(created|added|modified|updated|changed|read|scanned)\b[:\s-]*", re.IGNORECASE
)


def classify_working_item(text: str) -> WorkingItem:
    """Pick the display badge for a working-log entry."""
    for pattern, badge in _BADGE_PREFIXES:
        if pattern.match(text):
            return WorkingItem(badge=badge, text=_BADGE_STRIP_RE.sub("", text, count=1))
    return WorkingItem(badge=None, text=text)


def _truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _parse_token_value(raw: str) -> int | None:
    match = TOKEN_VALUE_RE.match(raw.strip())
    if not match:
        return None
    return int(match.group(1).replace(",", ""))


def _find_header(lines: list[str]) -> TranscriptHeader | None:
    for line in lines:
        match = HEADER_RE.match(line.strip())
        if match:
            return TranscriptHeader(
                agent=match.group("agent").strip() or None,
                command=match.group("command").strip() or None,
            )
    return None


class _Block(Enum):
    NONE = "none"
    WORKING = "working"
    THINKING = "thinking"
    ANSWER = "answer"
    INSTRUCTIONS = "instructions"
    EXEC = "exec"


class _TranscriptScanner:
    """Single pass over transcript lines, one open block at a time."""

    def __init__(self, header: TranscriptHeader | None) -> None:
        self.header = header
        self.agent_names = set(KNOWN_AGENTS)
        if header and header.agent:
            self.agent_names.add(header.agent.lower())

        self.block = _Block.NONE
        self.body: list[str] = []
        # An answer opened by a bare marker holds verbatim text; only a
        # separator or a closing banner ends it.
        self.bare_answer = False
        self.separators = 0
        self.meta_open = True
        self.recognized = header is not None
        self.pending_tokens = False

        self.meta: dict[str, str] = {}
        self.working: list[str] = []
        self.thinking: list[str] = []
        self.answer: str | None = None
        self.instructions: list[str] = []
        self.tokens_used: int | None = None
        self.success: bool | None = None
        self.commands: list[CommandRun] = []

    def scan(self, lines: list[str]) -> None:
        for line in lines:
            self._line(line.rstrip("\r"))
        self._close()

    def result(self) -> ParsedAgentOutput | None:
        if not self.recognized:
            return None
        thinking = "\n\n".join(self.thinking) or None
        instructions = "\n\n".join(self.instructions) or None
        return ParsedAgentOutput(
            header=self.header,
            meta=MappingProxyType(dict(self.meta)),
            working=tuple(self.working),
            user_instructions=instructions,
            thinking=thinking,
            answer=self.answer,
            tokens_used=self.tokens_used,
            success=self.success,
            commands=tuple(self.commands),
        )

    def _open(self, block: _Block, first: str | None = None) -> None:
        self._close()
        self.block = block
        self.bare_answer = False
        self.meta_open = False
        self.recognized = True
        self.body = [first] if first else []

    def _open_bare_answer(self) -> None:
        self._open(_Block.ANSWER)
        self.bare_answer = True

    def _close(self) -> None:
        text = "\n".join(self.body).strip()
        if self.block is _Block.THINKING and text:
            self.thinking.append(text)
        elif self.block is _Block.ANSWER:
            self.answer = text or self.answer
        elif self.block is _Block.INSTRUCTIONS and text:
            self.instructions.append(text)
        self.block = _Block.NONE
        self.bare_answer = False
        self.body = []

    def _line(self, line: str) -> None:
        stripped = line.strip()

        if self.pending_tokens:
            self.pending_tokens = False
            value = _parse_token_value(stripped) if stripped else None
            if value is not None:
                self.tokens_used = value
                self.recognized = True
                return

        if (
            self.bare_answer
            and not SEPARATOR_RE.match(stripped)
            and not BANNER_RE.match(stripped)
        ):
            self.body.append(line)
            return

        if self.header is not None and HEADER_RE.match(stripped):
            return

        if SEPARATOR_RE.match(stripped):
            self._close()
            self.separators += 1
            if self.separators >= 2:
                self.meta_open = False
            return

        stamp = TIMESTAMP_RE.match(stripped)
        rest = stamp.group("rest").strip() if stamp else stripped

        tokens = TOKENS_RE.match(rest)
        if tokens:
            self._close()
            self.recognized = True
            raw_value = tokens.group("value").strip()
            value = _parse_token_value(raw_value)
            if not raw_value:
                self.pending_tokens = True
            elif value is not None:
                self.tokens_used = value
            return

        banner = BANNER_RE.match(stripped)
        if banner:
            self._close()
            self.recognized = True
            text = banner.group("text").lower()
            if banner.group("glyph") == FAILURE_GLYPH:
                self.success = False
            elif "completed successfully" in text:
                self.success = True
            return

        if stamp:
            self._timestamped(rest)
            return

        self._body_line(line, stripped)

    def _timestamped(self, rest: str) -> None:
        self._close()
        if self.separators:
            self.meta_open = False
        lowered = rest.lower()

        if lowered == THINKING_LABEL:
            self._open(_Block.THINKING)
            return
        if lowered in self.agent_names:
            self._open(_Block.ANSWER)
            return
        instructions = INSTRUCTIONS_RE.match(rest)
        if instructions:
            self._open(_Block.INSTRUCTIONS, instructions.group("inline").strip())
            return

        result = EXEC_RESULT_RE.match(rest)
        if result:
            self._record_exec_result(result)
            return
        exec_match = EXEC_RE.match(rest)
        if exec_match:
            self._open(_Block.EXEC)
            self.commands.append(CommandRun(command=exec_match.group("cmd").strip()))

    def _record_exec_result(self, match: re.Match[str]) -> None:
        raw_status = match.group("status")
        status = EXEC_STATUS_MAP.get(raw_status, "fail")
        command = match.group("cmd").strip()
        if self.commands and self.commands[-1].status == "unknown":
            self.commands[-1] = replace(
                self.commands[-1], status=status, duration=match.group("duration")
            )
        else:
            self.commands.append(
                CommandRun(command=command, status=status, duration=match.group("duration"))
            )
        self._open(_Block.EXEC)

    def _body_line(self, line: str, stripped: str) -> None:
        if self.block is _Block.WORKING:
            if stripped == ANSWER_MARKER:
                self._open_bare_answer()
            elif stripped:
                self.working.append(BULLET_RE.sub("", stripped, count=1))
            return

        if self.block in (_Block.THINKING, _Block.ANSWER, _Block.INSTRUCTIONS):
            self.body.append(line)
            return

        if self.block is _Block.EXEC:
            if stripped and self.commands:
                last = self.commands[-1]
                self.commands[-1] = replace(last, output_lines=last.output_lines + 1)
            return

        if stripped == WORKING_MARKER:
            self._open(_Block.WORKING)
            return
        if stripped == ANSWER_MARKER:
            self._open_bare_answer()
            return
        instructions = INSTRUCTIONS_RE.match(stripped)
        if instructions:
            self._open(_Block.INSTRUCTIONS, instructions.group("inline").strip())
            return
        if self.separators == 1 and self.meta_open:
            meta = META_RE.match(stripped)
            if meta:
                self.meta[meta.group("key").strip().lower()] = meta.group("value").strip()
                self.recognized = True


def parse_agent_transcript(text: str) -> ParsedAgentOutput | None:
    """Parse transcript markup into a :class:`ParsedAgentOutput`.

    Returns None when the text has no recognisable structure at all; the
    caller should then show the raw text as-is.
    """
    if not text or not text.strip():
        return None
    lines = text.split("\n")
    scanner = _TranscriptScanner(_find_header(lines))
    scanner.scan(lines)
    return scanner.result()
