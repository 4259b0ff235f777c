"""cmdlang command line interface."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console

from cmdlang.actions import TraceDispatcher
from cmdlang.config import Settings, get_settings
from cmdlang.core.grammar import GrammarTable
from cmdlang.core.parser import CommandParser
from cmdlang.errors import CmdlangError
from cmdlang.grammars import load_grammar, window_manager_grammar

app = typer.Typer(
    name="cmdlang",
    help="Parse window-manager style command strings against a grammar table.",
    add_completion=False,
)


def _load(settings: Settings, grammar_path: Optional[Path]) -> GrammarTable:
    path = grammar_path or settings.grammar_path
    if path is None:
        return window_manager_grammar()
    logger.debug("cli.grammar.load path={}", path)
    return load_grammar(path)


def _fail(message: str) -> None:
    Console(stderr=True).print(f"Error: {message}", style="bold red", markup=False, highlight=False)
    raise typer.Exit(2)


def _settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as exc:
        _fail(f"invalid CMDLANG_* settings: {exc}")
        raise


@app.command("parse")
def parse(
    command: str = typer.Argument(..., help="Command string, e.g. 'move left; kill'"),
    grammar: Optional[Path] = typer.Option(None, "--grammar", "-g", help="YAML grammar file"),  # noqa: B008
    as_json: bool = typer.Option(False, "--json", help="Print the action results as a JSON array"),
) -> None:
    """Parse COMMAND and print the actions it would invoke."""

    settings = _settings()
    try:
        table = _load(settings, grammar)
        trace = TraceDispatcher(table)
        parser = CommandParser(
            table,
            trace,
            on_command_boundary=trace.mark_boundary,
            capture_capacity=settings.capture_capacity,
            max_input_length=settings.max_input_length,
        )
        outcome = parser.parse(command)
    except CmdlangError as exc:
        _fail(str(exc))
        return

    if as_json:
        typer.echo(json.dumps(outcome.results, ensure_ascii=False))
    else:
        for line in trace.lines():
            typer.echo(line)

    if outcome.diagnostic is not None:
        Console().print(outcome.diagnostic.render(), style="red", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(1)


@app.command("states")
def states(
    grammar: Optional[Path] = typer.Option(None, "--grammar", "-g", help="YAML grammar file"),  # noqa: B008
) -> None:
    """List every state of the grammar with the tokens it accepts, in match order."""

    settings = _settings()
    try:
        table = _load(settings, grammar)
    except CmdlangError as exc:
        _fail(str(exc))
        return

    for name, tokens in table.states.items():
        marker = " (initial)" if name == table.initial else ""
        typer.echo(f"{name}{marker}: {', '.join(token.display_name for token in tokens)}")
