# lqy/errors.py
"""Exceptions raised by lqy. Only the CLI turns them into exit codes."""
from __future__ import annotations


class LqyError(Exception):
    """Base class for every error lqy raises on purpose."""


class ConfigError(LqyError):
    """Config file missing, unreadable, or malformed."""


class UsageError(LqyError):
    """Nothing to ask, or mutually exclusive flags given together."""


# ---------- completion failures -----------------------------------------
class CompletionError(LqyError):
    """Anything that went wrong between sending the prompt and getting text back."""


class APIError(CompletionError):
    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"API request failed with status code {status_code}: {body}")


class ParseError(CompletionError):
    """Response body was not the chat-completion JSON we expected."""


class NoChoicesError(CompletionError):
    def __init__(self, message: str = "no response choices returned"):
        super().__init__(message)


class TransportError(CompletionError):
    """The request never produced an HTTP response (DNS, TLS, connection reset)."""
