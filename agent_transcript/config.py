"""Configuration handling for agent-transcript."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

UI_MODES = {"auto", "rich", "plain"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


def _parse_bool(value: str | None) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return False
    return bool(re.match(r"^(1|true|yes)$", value.lower()))


def _parse_int(value: str | None, default: int) -> int:
    """Parse an integer, falling back to default when unset or invalid."""
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_mode(value: str | None, default: str, allowed: set[str]) -> str:
    """Parse a mode value with allowed options."""
    if value is None:
        return default
    lowered = value.lower().strip()
    if lowered in allowed:
        return lowered
    return default


@dataclass
class TranscriptConfig:
    """Configuration for decoding and rendering agent transcripts."""

    agent: str = "claude"
    raw: bool = False  # skip decoding, treat input as transcript markup
    chunk_size: int = 0  # 0 feeds the whole input at once

    # UI config
    ui_mode: str = "auto"  # auto|rich|plain
    no_color: bool = False
    ascii_only: bool = False
    show_thinking: bool = False

    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> TranscriptConfig:
        """Load configuration from environment variables."""
        return cls(
            agent=os.environ.get("AGENT", "claude").strip().lower() or "claude",
            raw=_parse_bool(os.environ.get("AGENT_TRANSCRIPT_RAW")),
            chunk_size=_parse_int(os.environ.get("AGENT_TRANSCRIPT_CHUNK_SIZE"), 0),
            ui_mode=_parse_mode(os.environ.get("AGENT_TRANSCRIPT_UI"), "auto", UI_MODES),
            no_color="NO_COLOR" in os.environ,
            ascii_only=_parse_bool(os.environ.get("AGENT_TRANSCRIPT_ASCII")),
            show_thinking=_parse_bool(os.environ.get("AGENT_TRANSCRIPT_SHOW_THINKING")),
            log_level=os.environ.get("AGENT_TRANSCRIPT_LOG_LEVEL", "WARNING").strip().upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration, returning list of errors."""
        errors: list[str] = []

        if not self.agent:
            errors.append("AGENT must not be empty")

        if self.chunk_size < 0:
            errors.append(f"Chunk size must be non-negative (got: {self.chunk_size})")

        if self.ui_mode not in UI_MODES:
            errors.append(f"Unknown UI mode: {self.ui_mode}")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"Unknown log level: {self.log_level}")

        return errors
