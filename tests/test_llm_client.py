from unittest.mock import Mock

import pytest
import requests

from mock_interviewer.errors import OracleError, RateLimited, QuotaExhausted
from mock_interviewer.infrastructure.llm import GatewayClient, extract_json_span, parse_json_span


def _response(status_code=200, payload=None, json_error=False):
    resp = Mock()
    resp.status_code = status_code
    resp.text = "error body"
    if json_error:
        resp.json.side_effect = ValueError("not json")
    else:
        resp.json.return_value = payload
    return resp


def _client(resp=None, error=None):
    session = Mock()
    if error is not None:
        session.post.side_effect = error
    else:
        session.post.return_value = resp
    return GatewayClient("test-key", base_url="https://gateway.test/v1/", model="test-model", session=session), session


def test_returns_message_content():
    client, session = _client(_response(payload={"choices": [{"message": {"content": '["Q1"]'}}]}))
    text = client.chat([{"role": "user", "content": "hi"}], temperature=0.3)

    assert text == '["Q1"]'
    args, kwargs = session.post.call_args
    assert args[0] == "https://gateway.test/v1/chat/completions"
    assert kwargs["headers"]["Authorization"] == "Bearer test-key"
    assert kwargs["json"]["model"] == "test-model"
    assert kwargs["json"]["temperature"] == 0.3
    assert "top_p" not in kwargs["json"]


def test_top_p_sent_when_given():
    client, session = _client(_response(payload={"choices": [{"message": {"content": "ok"}}]}))
    client.chat([], temperature=0.95, top_p=0.95)
    assert session.post.call_args.kwargs["json"]["top_p"] == 0.95


def test_missing_content_returns_empty_string():
    client, _ = _client(_response(payload={"choices": []}))
    assert client.chat([]) == ""


def test_rate_limited():
    client, _ = _client(_response(status_code=429))
    with pytest.raises(RateLimited) as excinfo:
        client.chat([])
    assert excinfo.value.status_code == 429
    assert excinfo.value.user_message.startswith("Rate limit exceeded")


def test_quota_exhausted():
    client, _ = _client(_response(status_code=402))
    with pytest.raises(QuotaExhausted):
        client.chat([])


def test_server_error():
    client, _ = _client(_response(status_code=500))
    with pytest.raises(OracleError) as excinfo:
        client.chat([])
    assert excinfo.value.status_code == 500
    assert not isinstance(excinfo.value, (RateLimited, QuotaExhausted))


def test_network_error_mapped():
    client, _ = _client(error=requests.ConnectionError("connection refused"))
    with pytest.raises(OracleError):
        client.chat([])


def test_non_json_body():
    client, _ = _client(_response(json_error=True))
    with pytest.raises(OracleError):
        client.chat([])


def test_api_key_required():
    with pytest.raises(ValueError):
        GatewayClient("")


def test_extract_json_span():
    assert extract_json_span('```json\n[1, 2]\n```', "[", "]") == "[1, 2]"
    assert extract_json_span("no brackets", "[", "]") is None
    assert extract_json_span("", "{", "}") is None


def test_parse_json_span_errors():
    assert parse_json_span('text {"a": 1} text', "{", "}") == {"a": 1}
    with pytest.raises(ValueError):
        parse_json_span("nothing here", "[", "]")
    with pytest.raises(ValueError):
        parse_json_span("[oops", "[", "]")
