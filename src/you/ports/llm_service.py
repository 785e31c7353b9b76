"""LLM service interface."""

from typing import Protocol

from you.core.completions import ChatCompletionResponse, CompletionOptions, Message


class LLMService(Protocol):
    """Interface for chat-completion backends."""

    @property
    def model(self) -> str:
        ...

    def chat_completion(
        self,
        messages: list[Message],
        options: CompletionOptions | None = None,
    ) -> ChatCompletionResponse:
        """Send an ordered message list. Returns the structured completion."""
        ...

    def complete(self, prompt: str) -> str:
        """Single user prompt. Returns the first choice text."""
        ...

    def complete_with_system(self, system_prompt: str, user_prompt: str) -> str:
        """System + user prompt. Returns the first choice text."""
        ...
