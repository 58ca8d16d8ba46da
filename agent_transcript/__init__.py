"""Agent transcript pipeline: decoders and parser for CLI agent output."""

from agent_transcript.decoders import get_decoder
from agent_transcript.session import TranscriptSession
from agent_transcript.transcript import ParsedAgentOutput, parse_agent_transcript

__version__ = "0.1.0"

__all__ = [
    "ParsedAgentOutput",
    "TranscriptSession",
    "__version__",
    "get_decoder",
    "parse_agent_transcript",
]
