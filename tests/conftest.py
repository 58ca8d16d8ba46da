"""Pytest fixtures for agent_transcript tests."""

from __future__ import annotations

import json

import pytest

CODEX_TRANSCRIPT = """Agent: codex | Command: how are you?
[2025-09-04T00:48:13] OpenAI Codex v0.23.0 (research preview)
--------
workdir: /tmp/ws
model: gpt-5
provider: openai
approval: never
sandbox: read-only
reasoning effort: medium
reasoning summaries: auto
--------
[2025-09-04T00:48:12]
Working
• Considering structured output
| Designing a parser for structured markers
| Planning tests for parser and components
--------
[2025-09-04T00:48:17] thinking
I will reply concisely.
[2025-09-04T00:48:18] codex
I’m doing well, thanks! How can I help you today?
[2025-09-04T00:48:19] tokens used: 5347
✅ Command completed successfully"""

CLAUDE_EVENTS = [
    {
        "type": "system",
        "subtype": "init",
        "cwd": "/tmp",
        "session_id": "s1",
        "tools": ["Bash"],
        "model": "claude-opus-4-1-20250805",
    },
    {
        "type": "assistant",
        "message": {
            "id": "m1",
            "role": "assistant",
            "content": [
                {"type": "text", "text": "I'll check the folders in your current directory."}
            ],
        },
        "session_id": "s1",
    },
    {
        "type": "assistant",
        "message": {
            "id": "m1",
            "role": "assistant",
            "content": [
                {
                    "type": "tool_use",
                    "id": "t1",
                    "name": "Bash",
                    "input": {"command": "echo hello", "description": "say hi"},
                }
            ],
        },
        "session_id": "s1",
    },
    {
        "type": "user",
        "message": {
            "role": "user",
            "content": [
                {"tool_use_id": "t1", "type": "tool_result", "content": "hello", "is_error": False}
            ],
        },
        "session_id": "s1",
    },
    {
        "type": "assistant",
        "message": {
            "id": "m2",
            "role": "assistant",
            "content": [{"type": "text", "text": "Done."}],
        },
        "session_id": "s1",
    },
    {
        "type": "result",
        "subtype": "success",
        "is_error": False,
        "duration_ms": 100,
        "result": "Done.",
        "session_id": "s1",
    },
]

CLAUDE_STREAM = "".join(json.dumps(event) for event in CLAUDE_EVENTS)

CODEX_EVENTS = [
    {"type": "thread.started", "thread_id": "th_1"},
    {"type": "turn.started"},
    {"type": "item.completed", "item": {"id": "i0", "type": "reasoning", "text": "Planning"}},
    {
        "type": "item.completed",
        "item": {
            "id": "i1",
            "type": "command_execution",
            "command": "ls",
            "status": "completed",
            "aggregated_output": "README.md",
        },
    },
    {"type": "item.completed", "item": {"id": "i2", "type": "agent_message", "text": "All set."}},
    {
        "type": "turn.completed",
        "usage": {"input_tokens": 1200, "cached_input_tokens": 300, "output_tokens": 34},
    },
]

CODEX_STREAM = "".join(f"{json.dumps(event)}\n" for event in CODEX_EVENTS)


@pytest.fixture
def codex_transcript() -> str:
    """A complete transcript printed by the codex CLI."""
    return CODEX_TRANSCRIPT


@pytest.fixture
def claude_events() -> list[dict]:
    """Decoded Claude stream-json events, one per tool round."""
    return CLAUDE_EVENTS


@pytest.fixture
def claude_stream() -> str:
    """Concatenated Claude stream-json objects with no delimiters."""
    return CLAUDE_STREAM


@pytest.fixture
def codex_stream() -> str:
    """Newline-delimited Codex thread events."""
    return CODEX_STREAM


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear agent-transcript environment variables."""
    env_vars = [
        "AGENT",
        "AGENT_TRANSCRIPT_RAW",
        "AGENT_TRANSCRIPT_CHUNK_SIZE",
        "AGENT_TRANSCRIPT_UI",
        "AGENT_TRANSCRIPT_ASCII",
        "AGENT_TRANSCRIPT_SHOW_THINKING",
        "AGENT_TRANSCRIPT_LOG_LEVEL",
        "NO_COLOR",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)
