"""Chat-completion request/response records - no I/O dependencies."""

import json
from dataclasses import dataclass, field, fields
from enum import Enum

from ..errors import DecodeError


class Role(Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class Message:
    """A role-tagged chat message."""

    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(Role.SYSTEM, content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(Role.USER, content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(Role.ASSISTANT, content)

    def to_dict(self) -> dict:
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def from_api(cls, data: dict) -> "Message":
        try:
            role = Role(data["role"])
        except (KeyError, ValueError) as e:
            raise DecodeError(f"Invalid message role in response: {data.get('role')!r}") from e
        return cls(role=role, content=data.get("content") or "")


@dataclass
class CompletionOptions:
    """
    Optional sampling parameters.

    Unset fields are left out of the request body entirely, never sent as null.
    """

    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None
    stop: list[str] | None = None

    def with_temperature(self, temperature: float) -> "CompletionOptions":
        self.temperature = temperature
        return self

    def with_max_tokens(self, max_tokens: int) -> "CompletionOptions":
        self.max_tokens = max_tokens
        return self

    def with_top_p(self, top_p: float) -> "CompletionOptions":
        self.top_p = top_p
        return self

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


def build_request_body(
    model: str,
    messages: list[Message],
    options: CompletionOptions | None = None,
) -> dict:
    """Request body with the sampling options flattened in."""
    body = {"model": model, "messages": [m.to_dict() for m in messages]}
    if options:
        body.update(options.to_dict())
    return body


@dataclass
class Choice:
    index: int
    message: Message
    finish_reason: str | None = None


@dataclass
class Usage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass
class ChatCompletionResponse:
    """Structured completion with usage accounting."""

    id: str
    model: str
    choices: list[Choice] = field(default_factory=list)
    usage: Usage = field(default_factory=Usage)
    created: int = 0

    def content(self) -> str | None:
        """Text of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].message.content

    @classmethod
    def from_api(cls, data: dict) -> "ChatCompletionResponse":
        """Create ChatCompletionResponse from API response."""
        if not isinstance(data, dict):
            raise DecodeError(f"Expected completion object, got {type(data).__name__}")
        try:
            choices = [
                Choice(
                    index=c.get("index", i),
                    message=Message.from_api(c["message"]),
                    finish_reason=c.get("finish_reason"),
                )
                for i, c in enumerate(data.get("choices") or [])
            ]
            usage_data = data.get("usage") or {}
            return cls(
                id=data["id"],
                model=data["model"],
                choices=choices,
                usage=Usage(
                    prompt_tokens=usage_data.get("prompt_tokens", 0),
                    completion_tokens=usage_data.get("completion_tokens", 0),
                    total_tokens=usage_data.get("total_tokens", 0),
                ),
                created=data.get("created", 0),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise DecodeError(f"Malformed completion response: {e}") from e


def parse_error_message(body: str) -> str | None:
    """Extract `error.message` from a `{"error": {...}}` envelope, if the body is one."""
    try:
        data = json.loads(body)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return None
