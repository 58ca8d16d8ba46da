"""Typed event vocabularies for the Codex and Claude stream dialects.

Each dialect is a closed set of frozen dataclasses. Decoded JSON is mapped
onto these variants by :func:`parse_codex_event` and
:func:`parse_claude_event`; anything unrecognised becomes :class:`Ignored`
instead of raising, so newer agent versions never break the stream.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Union

Status = Literal["in_progress", "completed", "failed"]


@dataclass(frozen=True)
class Ignored:
    """An event, item or content part with an unrecognised type tag."""

    type: str | None


# Codex items


@dataclass(frozen=True)
class AgentMessage:
    text: str


@dataclass(frozen=True)
class Reasoning:
    text: str


@dataclass(frozen=True)
class CommandExecution:
    command: str
    status: str
    aggregated_output: str | None = None


@dataclass(frozen=True)
class FileUpdate:
    kind: str
    path: str


@dataclass(frozen=True)
class FileChange:
    status: str
    changes: tuple[FileUpdate, ...]


@dataclass(frozen=True)
class McpToolCall:
    server: str
    tool: str
    status: str


@dataclass(frozen=True)
class WebSearch:
    query: str


@dataclass(frozen=True)
class TodoItem:
    text: str
    completed: bool


@dataclass(frozen=True)
class TodoList:
    items: tuple[TodoItem, ...]


@dataclass(frozen=True)
class ItemError:
    message: str


CodexItem = Union[
    AgentMessage,
    Reasoning,
    CommandExecution,
    FileChange,
    McpToolCall,
    WebSearch,
    TodoList,
    ItemError,
    Ignored,
]


# Codex events


@dataclass(frozen=True)
class Usage:
    """Token usage reported at the end of a turn."""

    input_tokens: int
    cached_input_tokens: int
    output_tokens: int

    @property
    def total(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass(frozen=True)
class ThreadStarted:
    thread_id: str | None


@dataclass(frozen=True)
class TurnStarted:
    pass


@dataclass(frozen=True)
class TurnCompleted:
    usage: Usage | None


@dataclass(frozen=True)
class StreamError:
    message: str | None


@dataclass(frozen=True)
class ItemEvent:
    type: str
    item: CodexItem


@dataclass(frozen=True)
class ResponseDelta:
    text: str | None


@dataclass(frozen=True)
class ResponseCompleted:
    text: str | None


@dataclass(frozen=True)
class ResponseError:
    message: str | None


CodexEvent = Union[
    ThreadStarted,
    TurnStarted,
    TurnCompleted,
    StreamError,
    ItemEvent,
    ResponseDelta,
    ResponseCompleted,
    ResponseError,
    Ignored,
]


# Claude events


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class ToolUsePart:
    name: str
    command: str
    description: str


@dataclass(frozen=True)
class ToolResultPart:
    content: str | None


ContentPart = Union[TextPart, ToolUsePart, ToolResultPart, Ignored]


@dataclass(frozen=True)
class ClaudeSystem:
    model: str | None


@dataclass(frozen=True)
class ClaudeAssistant:
    content: tuple[ContentPart, ...]


@dataclass(frozen=True)
class ClaudeUser:
    content: tuple[ContentPart, ...]


@dataclass(frozen=True)
class ClaudeResult:
    result: str | None


ClaudeEvent = Union[ClaudeSystem, ClaudeAssistant, ClaudeUser, ClaudeResult, Ignored]


def _str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _opt_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return 0


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _type_of(value: Any) -> str | None:
    return _opt_str(value.get("type")) if isinstance(value, Mapping) else None


def parse_usage(value: Any) -> Usage | None:
    """Build usage from a ``turn.completed`` payload, or None if absent."""
    if not isinstance(value, Mapping):
        return None
    return Usage(
        input_tokens=_int(value.get("input_tokens")),
        cached_input_tokens=_int(value.get("cached_input_tokens")),
        output_tokens=_int(value.get("output_tokens")),
    )


def parse_codex_item(value: Any) -> CodexItem:
    """Map a decoded ``item`` object onto a Codex item variant."""
    item_type = _type_of(value)
    if item_type is None:
        return Ignored(None)
    data = _mapping(value)

    if item_type == "agent_message":
        return AgentMessage(text=_str(data.get("text")))
    if item_type == "reasoning":
        return Reasoning(text=_str(data.get("text")))
    if item_type == "command_execution":
        return CommandExecution(
            command=_str(data.get("command")),
            status=_str(data.get("status"), "in_progress"),
            aggregated_output=_opt_str(data.get("aggregated_output")),
        )
    if item_type == "file_change":
        changes = tuple(
            FileUpdate(kind=_str(change.get("kind")), path=_str(change.get("path")))
            for change in _list(data.get("changes"))
            if isinstance(change, Mapping)
        )
        return FileChange(status=_str(data.get("status"), "in_progress"), changes=changes)
    if item_type == "mcp_tool_call":
        return McpToolCall(
            server=_str(data.get("server")),
            tool=_str(data.get("tool")),
            status=_str(data.get("status"), "in_progress"),
        )
    if item_type == "web_search":
        return WebSearch(query=_str(data.get("query")))
    if item_type == "todo_list":
        items = tuple(
            TodoItem(text=_str(todo.get("text")), completed=bool(todo.get("completed")))
            for todo in _list(data.get("items"))
            if isinstance(todo, Mapping)
        )
        return TodoList(items=items)
    if item_type == "error":
        return ItemError(message=_str(data.get("message")))
    return Ignored(item_type)


def extract_delta_text(delta: Any) -> str | None:
    """Pull plain text out of a streaming delta payload."""
    if not delta:
        return None
    if isinstance(delta, str):
        return delta
    if isinstance(delta, list):
        text = "".join(filter(None, (extract_delta_text(part) for part in delta)))
        return text or None
    if isinstance(delta, Mapping):
        if isinstance(delta.get("text"), str):
            return delta["text"]
        if isinstance(delta.get("content"), list):
            text = "".join(
                entry["text"]
                for entry in delta["content"]
                if isinstance(entry, Mapping) and isinstance(entry.get("text"), str)
            )
            return text or None
        if isinstance(delta.get("delta"), str):
            return delta["delta"]
    return None


def extract_response_text(response: Any) -> str | None:
    """Pull the final text out of a ``response.completed`` payload."""
    if not isinstance(response, Mapping):
        return None
    if isinstance(response.get("text"), str):
        return response["text"]
    if isinstance(response.get("output"), list):
        text = "".join(
            part["text"]
            for part in response["output"]
            if isinstance(part, Mapping) and isinstance(part.get("text"), str)
        )
        return text or None
    return None


def parse_codex_event(value: Any) -> CodexEvent:
    """Map a decoded Codex stream value onto a Codex event variant."""
    if not isinstance(value, Mapping):
        return Ignored(None)
    event_type = _opt_str(value.get("type"))

    if event_type == "thread.started":
        return ThreadStarted(thread_id=_opt_str(value.get("thread_id")))
    if event_type == "turn.completed":
        return TurnCompleted(usage=parse_usage(value.get("usage")))
    if event_type == "turn.started":
        return TurnStarted()
    if event_type == "error":
        return StreamError(message=_opt_str(value.get("message")))
    if value.get("item"):
        return ItemEvent(type=event_type or "", item=parse_codex_item(value["item"]))
    if "delta" in value:
        return ResponseDelta(text=extract_delta_text(value["delta"]))
    if event_type == "response.completed":
        return ResponseCompleted(text=extract_response_text(value.get("response")))
    if event_type == "response.error":
        return ResponseError(message=_opt_str(_mapping(value.get("error")).get("message")))
    return Ignored(event_type)


def _parse_content_part(value: Any) -> ContentPart:
    part_type = _type_of(value)
    data = _mapping(value)
    if part_type == "text" and isinstance(data.get("text"), str):
        return TextPart(text=data["text"])
    if part_type == "tool_use":
        tool_input = _mapping(data.get("input"))
        return ToolUsePart(
            name=_str(data.get("name")) or "Tool",
            command=_str(tool_input.get("command")),
            description=_str(tool_input.get("description")),
        )
    if part_type == "tool_result":
        return ToolResultPart(content=_opt_str(data.get("content")))
    return Ignored(part_type)


def _parse_content(message: Any) -> tuple[ContentPart, ...] | None:
    content = _mapping(message).get("content")
    if not isinstance(content, list):
        return None
    return tuple(_parse_content_part(part) for part in content)


def parse_claude_event(value: Any) -> ClaudeEvent:
    """Map a decoded Claude stream-json object onto a Claude event variant."""
    if not isinstance(value, Mapping):
        return Ignored(None)
    event_type = _opt_str(value.get("type"))

    if event_type == "system":
        return ClaudeSystem(model=_opt_str(value.get("model")) or None)
    if event_type in {"assistant", "user"}:
        content = _parse_content(value.get("message"))
        if content is None:
            return Ignored(event_type)
        if event_type == "assistant":
            return ClaudeAssistant(content=content)
        return ClaudeUser(content=content)
    if event_type == "result":
        return ClaudeResult(result=_opt_str(value.get("result")))
    return Ignored(event_type)
