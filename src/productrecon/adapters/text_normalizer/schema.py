"""Pydantic models describing the chat-completion payloads."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

Role = Literal["system", "user", "assistant"]


class ChatBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ChatMessage(ChatBaseModel):
    role: Role
    content: str | None = None


class ChatCompletionRequest(ChatBaseModel):
    model: str
    messages: list[ChatMessage]
    max_tokens: int
    temperature: float


class ChatChoice(ChatBaseModel):
    index: int = 0
    message: ChatMessage | None = None


class ChatCompletionResponse(ChatBaseModel):
    choices: list[ChatChoice] = []

    def first_content(self) -> str | None:
        for choice in self.choices:
            if choice.message is not None and choice.message.content:
                content = choice.message.content.strip()
                if content:
                    return content
        return None
