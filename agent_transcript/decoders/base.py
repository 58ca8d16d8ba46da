"""Base decoder protocol and output tagging."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class OutputMode(str, Enum):
    """How a caller should apply decoder output to the displayed transcript."""

    REPLACE = "replace"
    APPEND = "append"


@dataclass(frozen=True)
class FeedResult:
    """Transcript text produced by one feed call."""

    text: str
    mode: OutputMode

    def apply(self, current: str) -> str:
        """Return the transcript after applying this result to ``current``."""
        if self.mode is OutputMode.REPLACE:
            return self.text
        return current + self.text


class Decoder(Protocol):
    """Protocol for per-agent stream decoders."""

    @property
    def agent(self) -> str:
        """Agent name the decoder was created for."""
        ...

    @property
    def mode(self) -> OutputMode:
        """Output mode of every result this decoder returns."""
        ...

    def feed(self, chunk: str) -> FeedResult | None:
        """Consume one unit of agent output in the decoder's native framing.

        Returns:
            The produced transcript text, or None when nothing visible changed
            and the displayed content should be left alone.
        """
        ...

    def push(self, chunk: str) -> FeedResult | None:
        """Consume a raw stdout chunk split at an arbitrary boundary."""
        ...

    def flush(self) -> FeedResult | None:
        """Emit anything held back waiting for more input."""
        ...
