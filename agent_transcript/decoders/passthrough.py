"""Passthrough decoder for agents that already print transcript markup."""

from __future__ import annotations

from agent_transcript.decoders.base import FeedResult, OutputMode
from agent_transcript.lines import sanitize_output_line


class PassthroughDecoder:
    """Forward CLI transcript text, dropping known noise lines.

    Only complete lines are forwarded so a noise line split across chunks
    is still recognised; the unterminated tail waits for :meth:`flush`.
    """

    def __init__(self, agent: str):
        self._agent = agent
        self._partial = ""

    @property
    def agent(self) -> str:
        return self._agent

    @property
    def mode(self) -> OutputMode:
        return OutputMode.APPEND

    def feed(self, chunk: str) -> FeedResult | None:
        if not chunk:
            return None
        text = self._partial + chunk
        complete, newline, self._partial = text.rpartition("\n")
        if not newline:
            self._partial = text
            return None
        return self._emit(f"{complete}\n")

    def push(self, chunk: str) -> FeedResult | None:
        return self.feed(chunk)

    def flush(self) -> FeedResult | None:
        remaining, self._partial = self._partial, ""
        if not remaining:
            return None
        return self._emit(remaining)

    def _emit(self, text: str) -> FeedResult | None:
        kept = [
            line
            for line in text.splitlines(keepends=True)
            if sanitize_output_line(self._agent, line) is not None
        ]
        if not kept:
            return None
        return FeedResult("".join(kept), OutputMode.APPEND)
