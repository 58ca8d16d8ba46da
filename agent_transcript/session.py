"""Running transcript for one agent execution."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agent_transcript.transcript import parse_agent_transcript

if TYPE_CHECKING:
    from agent_transcript.decoders.base import Decoder, FeedResult
    from agent_transcript.transcript import ParsedAgentOutput


class TranscriptSession:
    """Own a decoder and keep the transcript text it has produced so far.

    Replace-mode output overwrites the text, append-mode output extends it.
    """

    def __init__(self, decoder: Decoder) -> None:
        self._decoder = decoder
        self._text = ""
        self._closed = False

    @property
    def decoder(self) -> Decoder:
        return self._decoder

    @property
    def text(self) -> str:
        return self._text

    @property
    def closed(self) -> bool:
        return self._closed

    def feed(self, chunk: str) -> bool:
        """Push a raw chunk through the decoder.

        Returns:
            True if the transcript text changed.
        """
        if self._closed:
            raise RuntimeError("Cannot feed a closed transcript session")
        return self._apply(self._decoder.push(chunk))

    def close(self) -> bool:
        """Flush input the decoder held back and stop accepting chunks."""
        if self._closed:
            return False
        self._closed = True
        return self._apply(self._decoder.flush())

    def parsed(self) -> ParsedAgentOutput | None:
        """Parse the current transcript text."""
        return parse_agent_transcript(self._text)

    def _apply(self, result: FeedResult | None) -> bool:
        if result is None:
            return False
        updated = result.apply(self._text)
        changed = updated != self._text
        self._text = updated
        return changed
