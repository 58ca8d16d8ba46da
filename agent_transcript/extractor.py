"""Incremental extraction of concatenated JSON objects from a text stream."""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


class JsonObjectExtractor:
    """Split a stream of concatenated JSON objects into complete objects.

    Chunks may end anywhere, including inside a string literal or an escape
    sequence. The scan state is carried across calls, so every character is
    looked at once. Braces inside string literals are ignored, and text
    between top-level objects is skipped.
    """

    def __init__(self) -> None:
        self.reset()

    @property
    def pending(self) -> str:
        """Text retained for the next call (partial object or trailing text)."""
        return self._buf

    def reset(self) -> None:
        """Drop all buffered text and scan state."""
        self._buf = ""
        self._pos = 0
        self._depth = 0
        self._start = -1
        self._in_string = False
        self._escape = False

    def feed(self, chunk: str) -> list[str]:
        """Consume a chunk and return every top-level object it completes.

        Each returned string is the exact source text of one object, braces
        included. Nothing is parsed here.
        """
        if chunk:
            self._buf += chunk

        buf = self._buf
        objects: list[str] = []
        consumed = 0

        for i in range(self._pos, len(buf)):
            c = buf[i]
            if self._depth == 0:
                if c == "{":
                    self._start = i
                    self._depth = 1
                continue
            if self._in_string:
                if self._escape:
                    self._escape = False
                elif c == "\\":
                    self._escape = True
                elif c == '"':
                    self._in_string = False
                continue
            if c == '"':
                self._in_string = True
            elif c == "{":
                self._depth += 1
            elif c == "}":
                self._depth -= 1
                if self._depth == 0:
                    objects.append(buf[self._start : i + 1])
                    consumed = i + 1
                    self._start = -1

        self._pos = len(buf)
        if consumed:
            self._buf = buf[consumed:]
            self._pos -= consumed
            if self._start >= 0:
                self._start -= consumed

        return objects

    def feed_values(self, chunk: str) -> list[dict[str, Any]]:
        """Like :meth:`feed`, but decode each object.

        Objects that fail to decode are dropped without affecting the ones
        around them.
        """
        values: list[dict[str, Any]] = []
        for raw in self.feed(chunk):
            try:
                value = json.loads(raw)
            except json.JSONDecodeError as exc:
                logger.debug("Dropping malformed JSON fragment (%s): %.80s", exc, raw)
                continue
            if not isinstance(value, dict):
                logger.debug("Dropping non-object JSON value: %.80s", raw)
                continue
            values.append(value)
        return values
