"""Decoder implementations for each agent dialect."""

from agent_transcript.decoders.base import Decoder, FeedResult, OutputMode
from agent_transcript.decoders.claude import ClaudeDecoder
from agent_transcript.decoders.codex import CodexDecoder
from agent_transcript.decoders.passthrough import PassthroughDecoder

__all__ = [
    "ClaudeDecoder",
    "CodexDecoder",
    "Decoder",
    "FeedResult",
    "OutputMode",
    "PassthroughDecoder",
    "get_decoder",
]


def get_decoder(agent: str, raw: bool = False) -> Decoder:
    """Get the decoder matching an agent's output dialect."""
    name = (agent or "").strip().lower()
    if raw:
        return PassthroughDecoder(name)
    if name == "codex":
        return CodexDecoder(name)
    if name == "claude":
        return ClaudeDecoder(name)
    return PassthroughDecoder(name)
