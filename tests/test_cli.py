"""Tests for CLI module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from agent_transcript.cli import cli


@pytest.fixture(autouse=True)
def _isolated_env(clean_env: None) -> None:
    """Keep the caller's environment out of CLI tests."""


class TestCliHelp:
    """Tests for CLI help commands."""

    def test_main_help(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "decode" in result.output
        assert "parse" in result.output
        assert "render" in result.output

    def test_decode_help(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "--help"])
        assert result.exit_code == 0
        assert "--agent" in result.output
        assert "--chunk-size" in result.output

    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestDecode:
    """Tests for the decode command."""

    def test_claude_stream(self, claude_stream: str) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "--agent", "claude"], input=claude_stream)
        assert result.exit_code == 0
        assert result.output.startswith("Agent: claude | Command: stream-json\n")
        assert "• Bash: echo hello — say hi\n" in result.output
        assert result.output.endswith("Answer\nDone.\n")

    def test_agent_from_env(self, codex_stream: str, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AGENT", "codex")
        runner = CliRunner()
        result = runner.invoke(cli, ["decode"], input=codex_stream)
        assert result.exit_code == 0
        assert "_Planning_" in result.output
        assert "**Tokens:** 1,234 total" in result.output

    def test_cli_agent_overrides_env(
        self, claude_stream: str, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("AGENT", "codex")
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "-a", "claude"], input=claude_stream)
        assert result.exit_code == 0
        assert "Answer\nDone." in result.output

    def test_chunked_input_matches(self, codex_stream: str) -> None:
        runner = CliRunner()
        whole = runner.invoke(cli, ["decode", "-a", "codex"], input=codex_stream)
        chunked = runner.invoke(
            cli, ["decode", "-a", "codex", "--chunk-size", "5"], input=codex_stream
        )
        assert chunked.exit_code == 0
        assert chunked.output == whole.output

    def test_raw_passthrough(self, codex_transcript: str) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "-a", "codex", "--raw"], input=codex_transcript)
        assert result.exit_code == 0
        assert result.output == f"{codex_transcript}\n"

    def test_log_file(self, claude_stream: str, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "raw.log"
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["decode", "-a", "claude", "--chunk-size", "10", "--log-file", str(log_file)],
            input=claude_stream,
        )
        assert result.exit_code == 0
        assert log_file.read_text(encoding="utf-8") == claude_stream

    def test_source_file(self, claude_stream: str, tmp_path: Path) -> None:
        source = tmp_path / "claude.jsonl"
        source.write_text(claude_stream, encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "-a", "claude", str(source)])
        assert result.exit_code == 0
        assert result.output.endswith("Answer\nDone.\n")


class TestCliValidation:
    """Tests for CLI argument validation."""

    def test_negative_chunk_size(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "--chunk-size", "-1"], input="")
        assert result.exit_code == 2

    def test_invalid_env_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AGENT_TRANSCRIPT_LOG_LEVEL", "LOUD")
        runner = CliRunner()
        result = runner.invoke(cli, ["decode"], input="")
        assert result.exit_code == 1
        assert "Unknown log level" in result.output

    def test_missing_source_file(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["parse", "does-not-exist.txt"])
        assert result.exit_code == 2


class TestParse:
    """Tests for the parse command."""

    def test_json_output(self, codex_transcript: str) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["parse", "--json"], input=codex_transcript)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["header"]["agent"] == "codex"
        assert data["tokensUsed"] == 5347
        assert data["success"] is True
        assert data["meta"]["model"] == "gpt-5"

    def test_json_unstructured(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["parse", "--json"], input="plain words\n")
        assert result.exit_code == 0
        assert json.loads(result.output) is None

    def test_plain_render(self, codex_transcript: str) -> None:
        runner = CliRunner()
        result = runner.invoke(
            cli, ["parse", "--ui", "plain", "--no-color"], input=codex_transcript
        )
        assert result.exit_code == 0
        assert "I’m doing well, thanks!" in result.output
        assert "thinking hidden: 1 lines" in result.output
        assert "5,347" in result.output
        assert "OK: Command completed successfully" in result.output

    def test_show_thinking(self, codex_transcript: str) -> None:
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["parse", "--ui", "plain", "--no-color", "--show-thinking"],
            input=codex_transcript,
        )
        assert result.exit_code == 0
        assert "I will reply concisely." in result.output
        assert "thinking hidden" not in result.output

    def test_unstructured_text_is_echoed(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["parse", "--ui", "plain"], input="plain words")
        assert result.exit_code == 0
        assert result.output == "plain words\n"


class TestRender:
    """Tests for the render command."""

    def test_claude_stream(self, claude_stream: str) -> None:
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["render", "-a", "claude", "--ui", "plain", "--no-color", "--ascii"],
            input=claude_stream,
        )
        assert result.exit_code == 0
        assert "* Bash: echo hello — say hi" in result.output
        assert "| Done." in result.output
        assert "claude-opus-4-1-20250805" in result.output
