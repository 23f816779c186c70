# lqy/prompt.py
"""
Prompt assembly for lqy.

• read_input_source(stdin, args, interactive) → InputSource
• build_prompt(source, hint, max_tokens)      → final user message

Everything here is pure apart from reading the stdin handle you pass in;
terminal detection happens at the call site and comes in as a bool.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional, TextIO

from .errors import UsageError

DEFAULT_MAX_INPUT_TOKENS = 8000  # conservative, most models accept more
CHARS_PER_TOKEN = 4              # rough average; not a real tokenizer
TRUNCATION_MARKER = "\n...(input truncated due to length)"

USAGE = (
    "Usage: lqy [--config <filepath>] [-ojson|-oyaml] [--max-tokens <number>] <input>\n"
    "   or: <command> | lqy [-ojson|-oyaml] [--max-tokens <number>] <question>"
)


class OutputHint(enum.Enum):
    NONE = "none"
    JSON = "json"
    YAML = "yaml"


_HINTS = {
    OutputHint.JSON: (
        "Please structure your entire response as a JSON object. If the user query "
        "doesn't specify a particular structure, create an appropriate JSON structure "
        "for the response content."
    ),
    OutputHint.YAML: (
        "Please structure your entire response as a YAML manifest. If the user query "
        "doesn't specify a particular structure, create an appropriate YAML structure "
        "for the response content."
    ),
}


@dataclass(frozen=True)
class InputSource:
    stdin_text: Optional[str] = None
    arg_text: Optional[str] = None


# ---------- input --------------------------------------------------------
def read_input_source(stdin: TextIO, args: Iterable[str], *, interactive: bool) -> InputSource:
    """Collect piped text (only when stdin is not a terminal) and the joined argv words."""
    stdin_text = None if interactive else _read_all(stdin)
    arg_text = " ".join(args)
    return InputSource(stdin_text=stdin_text or None, arg_text=arg_text or None)


def _read_all(stdin: TextIO) -> str:
    # Piped input may be binary or another encoding; bad bytes become U+FFFD.
    buffer = getattr(stdin, "buffer", None)
    if buffer is None:
        return stdin.read()
    return buffer.read().decode("utf-8", errors="replace")


def combine(source: InputSource) -> str:
    question, context = source.arg_text, source.stdin_text
    if question and context:
        return f"Question: {question}\n\nContext:\n{context}"
    if context:
        return context
    if question:
        return question
    raise UsageError(USAGE)


# ---------- output-format hint --------------------------------------------
def resolve_hint(json_output: bool, yaml_output: bool) -> OutputHint:
    """Turn the two CLI flags into one hint; both at once is a usage error."""
    if json_output and yaml_output:
        raise UsageError("You can only specify json or yaml output")
    if json_output:
        return OutputHint.JSON
    if yaml_output:
        return OutputHint.YAML
    return OutputHint.NONE


def append_hint(prompt: str, hint: OutputHint) -> str:
    if hint is OutputHint.NONE:
        return prompt
    return f"{prompt}\n\n{_HINTS[hint]}"


# ---------- truncation -----------------------------------------------------
def truncate_input(prompt: str, max_tokens: int = DEFAULT_MAX_INPUT_TOKENS) -> str:
    """Clip *prompt* to roughly *max_tokens* tokens (4 code points each).

    str slicing counts code points, so a cut never lands inside a
    multi-byte character.
    """
    max_chars = max_tokens * CHARS_PER_TOKEN
    if len(prompt) <= max_chars:
        return prompt
    return prompt[:max_chars] + TRUNCATION_MARKER


def build_prompt(
    source: InputSource,
    hint: OutputHint = OutputHint.NONE,
    max_tokens: int = DEFAULT_MAX_INPUT_TOKENS,
) -> str:
    # Hint goes on before truncation, so a long prompt can lose its hint.
    return truncate_input(append_hint(combine(source), hint), max_tokens)
