"""Tests for config module."""

from __future__ import annotations

import pytest

from agent_transcript.config import TranscriptConfig, _parse_bool, _parse_int, _parse_mode


class TestParseBool:
    """Tests for _parse_bool helper."""

    def test_none_returns_false(self) -> None:
        assert _parse_bool(None) is False

    def test_empty_string_returns_false(self) -> None:
        assert _parse_bool("") is False

    def test_truthy_values(self) -> None:
        assert _parse_bool("1") is True
        assert _parse_bool("TRUE") is True
        assert _parse_bool("yes") is True

    def test_other_values_return_false(self) -> None:
        assert _parse_bool("0") is False
        assert _parse_bool("no") is False
        assert _parse_bool("random") is False


class TestParseInt:
    """Tests for _parse_int helper."""

    def test_none_returns_default(self) -> None:
        assert _parse_int(None, 7) == 7

    def test_blank_returns_default(self) -> None:
        assert _parse_int("  ", 7) == 7

    def test_valid_value(self) -> None:
        assert _parse_int(" 64 ", 0) == 64

    def test_invalid_returns_default(self) -> None:
        assert _parse_int("lots", 3) == 3


class TestParseMode:
    """Tests for _parse_mode helper."""

    def test_allowed_value_is_normalized(self) -> None:
        assert _parse_mode(" Rich ", "auto", {"auto", "rich"}) == "rich"

    def test_unknown_value_returns_default(self) -> None:
        assert _parse_mode("fancy", "auto", {"auto", "rich"}) == "auto"


class TestTranscriptConfig:
    """Tests for TranscriptConfig."""

    def test_defaults(self) -> None:
        config = TranscriptConfig()
        assert config.agent == "claude"
        assert config.raw is False
        assert config.chunk_size == 0
        assert config.ui_mode == "auto"
        assert config.log_level == "WARNING"

    def test_from_env_defaults(self, clean_env: None) -> None:
        config = TranscriptConfig.from_env()
        assert config == TranscriptConfig()

    def test_from_env_values(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AGENT", " Codex ")
        monkeypatch.setenv("AGENT_TRANSCRIPT_RAW", "1")
        monkeypatch.setenv("AGENT_TRANSCRIPT_CHUNK_SIZE", "256")
        monkeypatch.setenv("AGENT_TRANSCRIPT_UI", "plain")
        monkeypatch.setenv("AGENT_TRANSCRIPT_ASCII", "yes")
        monkeypatch.setenv("AGENT_TRANSCRIPT_SHOW_THINKING", "true")
        monkeypatch.setenv("AGENT_TRANSCRIPT_LOG_LEVEL", "debug")
        monkeypatch.setenv("NO_COLOR", "")

        config = TranscriptConfig.from_env()
        assert config.agent == "codex"
        assert config.raw is True
        assert config.chunk_size == 256
        assert config.ui_mode == "plain"
        assert config.ascii_only is True
        assert config.show_thinking is True
        assert config.log_level == "DEBUG"
        assert config.no_color is True

    def test_blank_agent_falls_back(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AGENT", "   ")
        assert TranscriptConfig.from_env().agent == "claude"

    def test_validate_ok(self) -> None:
        assert TranscriptConfig().validate() == []

    def test_validate_errors(self) -> None:
        config = TranscriptConfig(agent="", chunk_size=-1, ui_mode="fancy", log_level="LOUD")
        errors = config.validate()
        assert len(errors) == 4
        assert any("AGENT" in error for error in errors)
        assert any("Chunk size" in error for error in errors)
        assert any("fancy" in error for error in errors)
        assert any("LOUD" in error for error in errors)
