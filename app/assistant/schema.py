from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


Role = Literal["user", "assistant"]
EventName = Literal["stream-response", "stream-end", "error", "stream-error"]


class ConversationMessage(BaseModel):
    role: Role
    content: str


class PromptBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    parts: tuple[str, ...]

    @property
    def text(self) -> str:
        return "\n\n".join(self.parts)


class PromptPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    contents: tuple[PromptBlock, ...]

    def __len__(self) -> int:
        return len(self.contents)

    def to_messages(self) -> list[dict[str, str]]:
        return [{"role": block.role, "content": block.text} for block in self.contents]


class StreamEvent(BaseModel):
    event: EventName
    data: str | None = None


class AskRequest(BaseModel):
    question: str
    history: list[ConversationMessage] = Field(default_factory=list)


class AskResponse(BaseModel):
    answer: str
    events: list[StreamEvent]
    latency_ms: float


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    text: str
    is_user: bool
    timestamp: datetime = Field(default_factory=_now)

    def to_conversation(self) -> ConversationMessage:
        return ConversationMessage(role="user" if self.is_user else "assistant", content=self.text)


class ConversationThread(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    title: str = "New conversation"
    messages: list[ChatMessage] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    def add(self, text: str, is_user: bool) -> ChatMessage:
        message = ChatMessage(text=text, is_user=is_user)
        self.messages.append(message)
        self.updated_at = message.timestamp
        if is_user and len(self.messages) == 1:
            self.title = text.strip()[:40] or self.title
        return message

    def history(self) -> list[ConversationMessage]:
        return [message.to_conversation() for message in self.messages]
