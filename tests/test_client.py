# tests/test_client.py
import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from lqy.client import API_URL, build_request, generate_response, parse_response
from lqy.config import Config
from lqy.errors import APIError, CompletionError, NoChoicesError, ParseError, TransportError

CFG = Config(api_key="sk-test", model="gpt-4o-mini", max_tokens=256)


def _session(status_code=200, body=None):
    session = MagicMock()
    session.post.return_value = MagicMock(status_code=status_code, text=body)
    return session


def _ok(content):
    return json.dumps({"id": "chatcmpl-1", "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]})


def test_build_request_shape():
    req = build_request(CFG, "hi")
    assert req.model_dump() == {
        "model": "gpt-4o-mini",
        "messages": [{"role": "user", "content": "hi"}],
        "max_tokens": 256,
    }


def test_generate_response_posts_once_and_returns_first_choice():
    session = _session(body=_ok("42\n"))
    assert generate_response(CFG, "meaning of life?", session=session) == "42\n"

    session.post.assert_called_once()
    args, kwargs = session.post.call_args
    assert args == (API_URL,)
    assert kwargs["json"] == {
        "model": "gpt-4o-mini",
        "messages": [{"role": "user", "content": "meaning of life?"}],
        "max_tokens": 256,
    }
    assert kwargs["headers"] == {
        "Content-Type": "application/json",
        "Authorization": "Bearer sk-test",
    }
    assert "timeout" not in kwargs


def test_only_first_choice_is_used():
    body = json.dumps({"choices": [{"message": {"content": "first"}}, {"message": {"content": "second"}}]})
    assert parse_response(body) == "first"


def test_null_content_is_empty_string():
    assert parse_response(json.dumps({"choices": [{"message": {"content": None}}]})) == ""


def test_empty_choices_is_an_error():
    with pytest.raises(NoChoicesError, match="no response choices returned"):
        generate_response(CFG, "q", session=_session(body='{"choices": []}'))


def test_non_200_is_api_error_with_status_and_body():
    with pytest.raises(APIError) as exc:
        generate_response(CFG, "q", session=_session(status_code=401, body='{"error":"bad key"}'))
    assert exc.value.status_code == 401
    assert exc.value.body == '{"error":"bad key"}'
    assert "401" in str(exc.value)
    assert '{"error":"bad key"}' in str(exc.value)


def test_non_200_is_not_parsed():
    # 500 with an otherwise valid body is still a failure
    with pytest.raises(APIError):
        generate_response(CFG, "q", session=_session(status_code=500, body=_ok("nope")))


@pytest.mark.parametrize("body", ["not json", "{}", '{"choices": null}', '{"choices": [{"nomessage": 1}]}'])
def test_malformed_body_is_parse_error(body):
    with pytest.raises(ParseError):
        generate_response(CFG, "q", session=_session(body=body))


def test_transport_failure():
    session = MagicMock()
    session.post.side_effect = requests.ConnectionError("connection refused")
    with pytest.raises(TransportError, match="connection refused"):
        generate_response(CFG, "q", session=session)


def test_completion_errors_share_a_base():
    for cls in (APIError, ParseError, NoChoicesError, TransportError):
        assert issubclass(cls, CompletionError)


@patch("lqy.client.requests.post")
def test_default_transport_is_requests(mock_post):
    mock_post.return_value = MagicMock(status_code=200, text=_ok("pong"))
    assert generate_response(CFG, "ping") == "pong"
    mock_post.assert_called_once()
