# lqy/client.py
from __future__ import annotations

import logging
from typing import List, Optional

import requests
from pydantic import BaseModel, ConfigDict, ValidationError

from .config import Config
from .errors import APIError, NoChoicesError, ParseError, TransportError

logger = logging.getLogger(__name__)

API_URL = "https://api.openai.com/v1/chat/completions"


# ---------- I/O schema -------------------------------------------------
class ChatMessage(BaseModel):
    role: str
    content: str


class CompletionRequest(BaseModel):
    model: str
    messages: List[ChatMessage]
    max_tokens: int


class _ReplyMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: Optional[str] = None


class Choice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: _ReplyMessage


class CompletionResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    choices: List[Choice]


# ---------- request/response -------------------------------------------
def build_request(config: Config, prompt: str) -> CompletionRequest:
    return CompletionRequest(
        model=config.model,
        messages=[ChatMessage(role="user", content=prompt)],
        max_tokens=config.max_tokens,
    )


def parse_response(body: str) -> str:
    """Pull ``choices[0].message.content`` out of a raw response body."""
    try:
        resp = CompletionResponse.model_validate_json(body)
    except ValidationError as exc:
        raise ParseError(f"unexpected response body: {exc}") from exc
    if not resp.choices:
        raise NoChoicesError()
    return resp.choices[0].message.content or ""


def generate_response(config: Config, prompt: str, session: Optional[requests.Session] = None) -> str:
    """Send *prompt* as a single user message and return the model's answer.

    One blocking POST, no retries, no timeout beyond the transport default.
    """
    http = session or requests
    payload = build_request(config, prompt).model_dump()
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {config.api_key}",
    }
    logger.debug("POST %s model=%s prompt_len=%d", API_URL, config.model, len(prompt))

    try:
        r = http.post(API_URL, json=payload, headers=headers)
        body = r.text  # read the whole body before looking at the status
    except requests.RequestException as exc:
        raise TransportError(f"request to {API_URL} failed: {exc}") from exc

    logger.debug("response status=%s bytes=%d", r.status_code, len(body))
    if r.status_code != 200:
        raise APIError(r.status_code, body)
    return parse_response(body)
