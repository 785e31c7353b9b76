"""Tests for the OpenRouter chat-completion adapter."""

from unittest.mock import patch

import pytest

from you.adapters.openrouter import LlmClient
from you.config import LlmConfig
from you.core.completions import CompletionOptions, Message
from you.errors import ApiError, ConfigError, InvalidRequestError, RateLimitedError, UnauthorizedError


def completion_body(content: str | None = "Hello, this is a test response") -> dict:
    choices = []
    if content is not None:
        choices.append({"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"})
    return {
        "id": "gen-123",
        "model": "anthropic/claude-3.5-sonnet",
        "created": 1700000000,
        "choices": choices,
        "usage": {"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30},
    }


@pytest.fixture
def client():
    return LlmClient(LlmConfig(api_key="test_key"))


class TestHeaders:
    def test_bearer_only(self, client):
        headers = client._headers()
        assert headers["Authorization"] == "Bearer test_key"
        assert headers["Content-Type"] == "application/json"
        assert "HTTP-Referer" not in headers
        assert "X-Title" not in headers

    def test_attribution_headers(self):
        config = LlmConfig(api_key="k", site_url="https://me.example.com", app_name="you")
        headers = LlmClient(config)._headers()
        assert headers["HTTP-Referer"] == "https://me.example.com"
        assert headers["X-Title"] == "you"


class TestFromEnv:
    def test_missing_token(self, clean_env):
        with pytest.raises(ConfigError, match="OPEN_ROUTER_TOKEN environment variable not set"):
            LlmClient.from_env()

    def test_model_override(self, clean_env):
        clean_env.setenv("OPEN_ROUTER_TOKEN", "k")
        assert LlmClient.from_env("openai/gpt-4o").model == "openai/gpt-4o"
        assert LlmClient.from_env().model == "anthropic/claude-3.5-sonnet"


class TestChatCompletion:
    def test_success(self, client, response):
        with patch.object(client._session, "request", return_value=response(200, completion_body())) as mock_request:
            completion = client.chat_completion([Message.user("Hello")])

        assert completion.content() == "Hello, this is a test response"
        assert completion.usage.total_tokens == 30

        args, kwargs = mock_request.call_args
        assert args == ("POST", "https://openrouter.ai/api/v1/chat/completions")
        assert kwargs["json"] == {
            "model": "anthropic/claude-3.5-sonnet",
            "messages": [{"role": "user", "content": "Hello"}],
        }
        assert kwargs["timeout"] == 120.0

    def test_options_in_body(self, client, response):
        with patch.object(client._session, "request", return_value=response(200, completion_body())) as mock_request:
            client.chat_completion([Message.user("Hi")], CompletionOptions(temperature=0.7, max_tokens=100))

        body = mock_request.call_args.kwargs["json"]
        assert body["temperature"] == 0.7
        assert body["max_tokens"] == 100
        assert "top_p" not in body

    def test_empty_messages_no_request(self, client):
        with patch.object(client._session, "request") as mock_request:
            with pytest.raises(InvalidRequestError, match="Messages cannot be empty"):
                client.chat_completion([])
        mock_request.assert_not_called()

    def test_rate_limited(self, client, response):
        resp = response(429, "Too many requests", headers={"retry-after": "60"})
        with patch.object(client._session, "request", return_value=resp):
            with pytest.raises(RateLimitedError) as exc_info:
                client.chat_completion([Message.user("Hi")])
        assert exc_info.value.retry_after == 60

    def test_rate_limited_bad_header(self, client, response):
        resp = response(429, "Too many requests", headers={"retry-after": "soon"})
        with patch.object(client._session, "request", return_value=resp):
            with pytest.raises(RateLimitedError) as exc_info:
                client.chat_completion([Message.user("Hi")])
        assert exc_info.value.retry_after is None

    def test_unauthorized(self, client, response):
        with patch.object(client._session, "request", return_value=response(401, "no")):
            with pytest.raises(UnauthorizedError):
                client.chat_completion([Message.user("Hi")])

    def test_error_envelope(self, client, response):
        resp = response(400, {"error": {"message": "Invalid model", "code": 400}})
        with patch.object(client._session, "request", return_value=resp):
            with pytest.raises(ApiError) as exc_info:
                client.chat_completion([Message.user("Hi")])
        assert exc_info.value.message == "Invalid model"


class TestComplete:
    def test_complete(self, client, response):
        with patch.object(client._session, "request", return_value=response(200, completion_body())):
            assert client.complete("Hello") == "Hello, this is a test response"

    def test_complete_with_system(self, client, response):
        with patch.object(client._session, "request", return_value=response(200, completion_body("ok"))) as mock_request:
            assert client.complete_with_system("Be brief", "Hello") == "ok"

        messages = mock_request.call_args.kwargs["json"]["messages"]
        assert messages == [
            {"role": "system", "content": "Be brief"},
            {"role": "user", "content": "Hello"},
        ]

    def test_no_content(self, client, response):
        with patch.object(client._session, "request", return_value=response(200, completion_body(None))):
            with pytest.raises(InvalidRequestError, match="No content in response"):
                client.complete("Hello")
