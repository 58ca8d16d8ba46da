"""Line splitting and filtering for agent stdout."""

from __future__ import annotations

import re

_SEPARATORS_RE = re.compile(r"[\r\n]+")

NODE_TRACE_HINT = "(Use `node --trace-warnings ...` to show where the warning was created)"
_NODE_PROPERTY_WARNINGS = (
    "Warning: Accessing non-existent property 'lineno'",
    "Warning: Accessing non-existent property 'filename'",
)


def normalize_sse_line(line: str) -> str | None:
    """Strip server-sent-event framing from a single line.

    Returns the payload, or None when the line carries nothing to decode
    (blank lines, ``event:``/``id:`` lines, empty data, ``[DONE]``).
    """
    trimmed = line.strip()
    if not trimmed:
        return None

    if trimmed.startswith("data:"):
        data = trimmed[5:].strip()
        if not data or data.upper() == "[DONE]":
            return None
        return data

    if trimmed.startswith(("event:", "id:")):
        return None

    return trimmed


def sanitize_output_line(agent: str, line: str) -> str | None:
    """Drop known Node.js warnings printed by the codex CLI.

    Only exact matches are dropped so agent output that merely mentions
    similar words survives. Returns None for a dropped line.
    """
    if agent.lower() != "codex":
        return line

    trimmed = line.strip()
    if trimmed == NODE_TRACE_HINT:
        return None
    if (
        trimmed.startswith("(node:")
        and trimmed.endswith("inside circular dependency")
        and any(warning in trimmed for warning in _NODE_PROPERTY_WARNINGS)
    ):
        return None
    return line


class CodexLineAccumulator:
    """Split raw codex stdout into normalized payload lines.

    Codex often terminates records with a bare carriage return, so ``\\r``,
    ``\\n`` and ``\\r\\n`` all end a line. A trailing partial line stays
    buffered until its terminator arrives or :meth:`flush` is called.
    """

    def __init__(self) -> None:
        self._buffer = ""

    @property
    def pending(self) -> str:
        return self._buffer

    def push(self, chunk: str) -> list[str]:
        """Consume a chunk and return the payloads of all completed lines."""
        if not chunk:
            return []

        self._buffer += chunk
        parts = _SEPARATORS_RE.split(self._buffer)
        self._buffer = parts.pop()

        results: list[str] = []
        for part in parts:
            payload = normalize_sse_line(part)
            if payload is not None:
                results.append(payload)
        return results

    def flush(self) -> str | None:
        """Return the payload of the buffered partial line, if any."""
        remaining, self._buffer = self._buffer, ""
        if not remaining:
            return None
        return normalize_sse_line(remaining)
