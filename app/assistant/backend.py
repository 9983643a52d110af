from __future__ import annotations

from typing import Any, AsyncIterator, Protocol

from openai import AsyncOpenAI

from app.assistant.errors import BackendRejectedError
from app.assistant.relay import Fragment
from app.assistant.schema import PromptPayload
from app.core.config import Settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class FragmentTextError(ValueError):
    pass


class ChunkFragment:
    """Exposes the text of one streamed completion chunk."""

    def __init__(self, chunk: Any) -> None:
        self.chunk = chunk

    def text(self) -> str:
        choices = getattr(self.chunk, "choices", None) or []
        if not choices:
            usage = getattr(self.chunk, "usage", None)
            if usage is not None:
                return ""
            raise FragmentTextError("chunk carries no choices")

        choice = choices[0]
        content = choice.delta.content if choice.delta is not None else None
        if not content and choice.finish_reason == "content_filter":
            raise FragmentTextError("chunk was blocked by the content filter")
        return content or ""


def _carries_text(chunk: Any) -> bool:
    """False for role-only, finish-only and usage-only chunks."""
    choices = getattr(chunk, "choices", None) or []
    if not choices:
        return getattr(chunk, "usage", None) is None
    choice = choices[0]
    content = choice.delta.content if choice.delta is not None else None
    return bool(content) or choice.finish_reason == "content_filter"


class GenerationBackend(Protocol):
    async def stream(self, payload: PromptPayload) -> AsyncIterator[Fragment]:
        ...


class OpenAICompatibleBackend:
    def __init__(self, settings: Settings, client: AsyncOpenAI | None = None) -> None:
        self.settings = settings
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.settings.google_api_key:
                raise BackendRejectedError("GOOGLE_API_KEY not set")
            self._client = AsyncOpenAI(
                api_key=self.settings.google_api_key,
                base_url=self.settings.llm_base_url,
            )
        return self._client

    async def stream(self, payload: PromptPayload) -> AsyncIterator[Fragment]:
        generation = self.settings.generation_config
        response = await self.client.chat.completions.create(
            model=self.settings.gemini_model,
            messages=payload.to_messages(),
            max_tokens=generation["max_tokens"],
            temperature=generation["temperature"],
            top_p=generation["top_p"],
            extra_body={"top_k": generation["top_k"]},
            stream=True,
        )
        if response is None or not hasattr(response, "__aiter__"):
            raise BackendRejectedError(f"Invalid response from model {self.settings.gemini_model}")
        return self._fragments(response)

    @staticmethod
    async def _fragments(response: Any) -> AsyncIterator[Fragment]:
        async for chunk in response:
            if _carries_text(chunk):
                yield ChunkFragment(chunk)
