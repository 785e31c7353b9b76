"""OpenRouter adapter - HTTP client for chat completions."""

import logging

from ..config import LlmConfig
from ..core.completions import (
    ChatCompletionResponse,
    CompletionOptions,
    Message,
    build_request_body,
)
from ..errors import InvalidRequestError
from .http import build_session, check_response, decode_json, send

logger = logging.getLogger(__name__)

SERVICE = "LLM"


class LlmClient:
    """
    OpenRouter-compatible chat completion adapter.

    Implements LLMService protocol. One request per call, no retries.
    """

    def __init__(self, config: LlmConfig):
        self.config = config
        self._session = build_session(config.proxy)
        logger.info(f"Created LLM client for model: {config.model}")

    @classmethod
    def from_env(cls, model: str | None = None) -> "LlmClient":
        """Client configured from OPEN_ROUTER_TOKEN and LLM_* variables."""
        return cls(LlmConfig.from_env(model) if model else LlmConfig.from_env())

    @property
    def model(self) -> str:
        return self.config.model

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        if self.config.site_url:
            headers["HTTP-Referer"] = self.config.site_url
        if self.config.app_name:
            headers["X-Title"] = self.config.app_name
        return headers

    def chat_completion(
        self,
        messages: list[Message],
        options: CompletionOptions | None = None,
    ) -> ChatCompletionResponse:
        """Send a message list, return the structured completion."""
        if not messages:
            raise InvalidRequestError("Messages cannot be empty")

        url = f"{self.config.base_url.rstrip('/')}/chat/completions"
        body = build_request_body(self.config.model, messages, options)
        logger.debug(f"Sending chat completion request to {url} ({len(messages)} messages)")

        resp = send(
            self._session,
            SERVICE,
            "POST",
            url,
            headers=self._headers(),
            json=body,
            timeout=self.config.timeout,
        )
        logger.debug(f"Received response with status: {resp.status_code}")
        check_response(resp, SERVICE, rate_limit=True)

        completion = ChatCompletionResponse.from_api(decode_json(resp, SERVICE))
        logger.info(f"Completion successful: {completion.usage.total_tokens} tokens used")
        return completion

    def _first_content(self, messages: list[Message]) -> str:
        content = self.chat_completion(messages).content()
        if content is None:
            raise InvalidRequestError("No content in response")
        return content

    def complete(self, prompt: str) -> str:
        """Single user prompt in, first choice text out."""
        return self._first_content([Message.user(prompt)])

    def complete_with_system(self, system_prompt: str, user_prompt: str) -> str:
        """Like complete(), preceded by a system prompt."""
        return self._first_content([Message.system(system_prompt), Message.user(user_prompt)])
