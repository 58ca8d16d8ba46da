"""CLI entry point for agent-transcript."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import click
from click.core import ParameterSource

from agent_transcript import __version__
from agent_transcript.config import TranscriptConfig
from agent_transcript.decoders import get_decoder
from agent_transcript.logging_config import setup_logging
from agent_transcript.session import TranscriptSession
from agent_transcript.transcript import parse_agent_transcript
from agent_transcript.ui import get_ui, render_output

if TYPE_CHECKING:
    from agent_transcript.decoders.base import Decoder, FeedResult, OutputMode


def _use_cli_value(ctx: click.Context, name: str) -> bool:
    return ctx.get_parameter_source(name) == ParameterSource.COMMANDLINE


def _normalize_ui_mode(value: str) -> str:
    normalized = (value or "auto").strip().lower()
    if normalized in {"plain", "off", "no", "0"}:
        return "plain"
    if normalized not in {"auto", "rich", "plain"}:
        return "auto"
    return normalized


class LoggingDecoder:
    """Decoder wrapper that appends raw input chunks to a log file."""

    def __init__(self, decoder: Decoder, log_path: Path) -> None:
        self._decoder = decoder
        self._log_path = log_path
        self._log_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def agent(self) -> str:
        return self._decoder.agent

    @property
    def mode(self) -> OutputMode:
        return self._decoder.mode

    def feed(self, chunk: str) -> FeedResult | None:
        self._write(chunk)
        return self._decoder.feed(chunk)

    def push(self, chunk: str) -> FeedResult | None:
        self._write(chunk)
        return self._decoder.push(chunk)

    def flush(self) -> FeedResult | None:
        return self._decoder.flush()

    def _write(self, chunk: str) -> None:
        with self._log_path.open("a", encoding="utf-8") as handle:
            handle.write(chunk)


_CONFIG_FIELDS = {"ui": "ui_mode"}


def _load_config(ctx: click.Context, **overrides: object) -> TranscriptConfig:
    """Build config from the environment, then apply explicit CLI options."""
    config = TranscriptConfig.from_env()
    for name, value in overrides.items():
        if _use_cli_value(ctx, name):
            setattr(config, _CONFIG_FIELDS.get(name, name), value)
    config.ui_mode = _normalize_ui_mode(config.ui_mode)
    config.agent = (config.agent or "").strip().lower()

    errors = config.validate()
    if errors:
        for error in errors:
            click.echo(f"ERROR: {error}", err=True)
        sys.exit(1)
    return config


def _iter_chunks(text: str, size: int):
    if size <= 0:
        yield text
        return
    for start in range(0, len(text), size):
        yield text[start : start + size]


def _decode(
    text: str, config: TranscriptConfig, log_file: Path | None = None
) -> TranscriptSession:
    decoder: Decoder = get_decoder(config.agent, raw=config.raw)
    if log_file is not None:
        decoder = LoggingDecoder(decoder, log_file)
    session = TranscriptSession(decoder)
    for chunk in _iter_chunks(text, config.chunk_size):
        session.feed(chunk)
    session.close()
    return session


def _echo_text(text: str) -> None:
    click.echo(text, nl=not text.endswith("\n"))


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--log-json", is_flag=True, help="Emit logs as JSON lines")
def cli(verbose: bool, log_json: bool) -> None:
    """agent-transcript - decode and parse CLI agent transcripts."""
    level = "DEBUG" if verbose else TranscriptConfig.from_env().log_level
    setup_logging(level, json_output=log_json)


_source_argument = click.argument(
    "source", type=click.File("r", encoding="utf-8"), default="-"
)
_agent_option = click.option(
    "--agent", "-a",
    help="Agent that produced the output (claude, codex, gemini, test)",
)
_chunk_option = click.option(
    "--chunk-size",
    type=click.IntRange(min=0),
    default=0,
    help="Feed input in chunks of this many characters (0 = all at once)",
)
_raw_option = click.option(
    "--raw",
    is_flag=True,
    help="Treat input as transcript markup (skip the agent decoder)",
)
_ui_options = (
    click.option(
        "--ui",
        type=click.Choice(["auto", "rich", "plain"]),
        default="auto",
        help="UI mode",
    ),
    click.option("--no-color", is_flag=True, help="Disable colors"),
    click.option("--ascii", "ascii_only", is_flag=True, help="Use ASCII characters only"),
    click.option("--show-thinking", is_flag=True, help="Expand the thinking block"),
)


def _with_ui_options(func):
    for option in reversed(_ui_options):
        func = option(func)
    return func


@cli.command()
@_source_argument
@_agent_option
@_chunk_option
@_raw_option
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Append the raw input to this file",
)
def decode(
    source: TextIO,
    agent: str | None,
    chunk_size: int,
    raw: bool,
    log_file: Path | None,
) -> None:
    """Decode agent output into transcript markup.

    SOURCE is a file with captured agent stdout (default: stdin).
    """
    ctx = click.get_current_context()
    config = _load_config(ctx, agent=agent, chunk_size=chunk_size, raw=raw)
    session = _decode(source.read(), config, log_file)
    _echo_text(session.text)


@cli.command()
@_source_argument
@click.option("--json", "as_json", is_flag=True, help="Print the parsed record as JSON")
@_with_ui_options
def parse(
    source: TextIO,
    as_json: bool,
    ui: str,
    no_color: bool,
    ascii_only: bool,
    show_thinking: bool,
) -> None:
    """Parse transcript markup and display its sections.

    SOURCE is a transcript file (default: stdin).
    """
    ctx = click.get_current_context()
    config = _load_config(
        ctx,
        ui=ui,
        no_color=no_color,
        ascii_only=ascii_only,
        show_thinking=show_thinking,
    )
    text = source.read()
    parsed = parse_agent_transcript(text)

    if as_json:
        payload = parsed.to_dict() if parsed is not None else None
        click.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    ui_impl = get_ui(config.ui_mode, config.no_color, config.ascii_only)
    render_output(ui_impl, parsed, text, show_thinking=config.show_thinking)


@cli.command()
@_source_argument
@_agent_option
@_chunk_option
@_raw_option
@_with_ui_options
def render(
    source: TextIO,
    agent: str | None,
    chunk_size: int,
    raw: bool,
    ui: str,
    no_color: bool,
    ascii_only: bool,
    show_thinking: bool,
) -> None:
    """Decode agent output and display the parsed sections.

    SOURCE is a file with captured agent stdout (default: stdin).
    """
    ctx = click.get_current_context()
    config = _load_config(
        ctx,
        agent=agent,
        chunk_size=chunk_size,
        raw=raw,
        ui=ui,
        no_color=no_color,
        ascii_only=ascii_only,
        show_thinking=show_thinking,
    )
    session = _decode(source.read(), config)
    ui_impl = get_ui(config.ui_mode, config.no_color, config.ascii_only)
    render_output(
        ui_impl, session.parsed(), session.text, show_thinking=config.show_thinking
    )


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
