#!/usr/bin/env python
"""
lqy [--config <path>] [--max-tokens <n>] [-ojson | -oyaml] <question …>

Example:
    lqy what does EADDRINUSE mean
    kubectl describe pod web-0 | lqy -oyaml why is this pod pending
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import typer

from .client import generate_response
from .config import default_config_path, load_config
from .errors import CompletionError, ConfigError, UsageError
from .prompt import DEFAULT_MAX_INPUT_TOKENS, build_prompt, read_input_source, resolve_hint

logger = logging.getLogger("lqy")

app = typer.Typer(add_completion=False)


def _setup_logging() -> None:
    # export LQY_LOG_LEVEL=DEBUG to see the request going out (stderr only)
    level = logging.getLevelName(os.getenv("LQY_LOG_LEVEL", "WARNING").upper())
    if not isinstance(level, int):  # unknown name comes back as "Level <name>"
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def _stdin_is_interactive() -> bool:
    return sys.stdin is None or sys.stdin.isatty()


# flags end at the first question word, so `lqy explain ls -la` keeps "-la"
@app.command(context_settings={"allow_interspersed_args": False})
def ask(
    question: Optional[List[str]] = typer.Argument(None, help="question words; joined with spaces"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-config", help="path to config file [default: ~/.lqyconfig.yaml]"
    ),
    max_tokens: int = typer.Option(
        DEFAULT_MAX_INPUT_TOKENS, "--max-tokens", "-max-tokens", min=1,
        help="maximum number of tokens to use for input",
    ),
    json_output: bool = typer.Option(False, "--ojson", "-ojson", help="request JSON-structured output"),
    yaml_output: bool = typer.Option(False, "--oyaml", "-oyaml", help="request YAML-structured output"),
):
    """Send a question (plus any piped context) to the chat model and print the answer."""
    _setup_logging()

    try:
        hint = resolve_hint(json_output, yaml_output)
    except UsageError as exc:
        print(exc)
        raise typer.Exit(1)

    config_path = config or default_config_path()
    try:
        cfg = load_config(config_path)
    except ConfigError as exc:
        print(f"Error loading config: {exc}", file=sys.stderr)
        raise typer.Exit(1)

    source = read_input_source(sys.stdin, question or [], interactive=_stdin_is_interactive())
    try:
        prompt = build_prompt(source, hint, max_tokens)
    except UsageError as exc:
        print(exc)
        raise typer.Exit(1)
    logger.info("Prompt ready (%d chars, hint=%s)", len(prompt), hint.value)

    try:
        answer = generate_response(cfg, prompt)
    except CompletionError as exc:
        print(f"Error generating response: {exc}", file=sys.stderr)
        raise typer.Exit(1)

    print(answer, end="")


if __name__ == "__main__":
    app()          # `python -m lqy.cli -ojson list three prime numbers`
