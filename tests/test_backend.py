import asyncio
from types import SimpleNamespace

import pytest

from app.assistant.backend import ChunkFragment, FragmentTextError, OpenAICompatibleBackend
from app.assistant.errors import BackendRejectedError
from app.assistant.schema import PromptBlock, PromptPayload
from app.core.config import Settings


def _chunk(content=None, finish_reason=None):
    return SimpleNamespace(
        choices=[SimpleNamespace(delta=SimpleNamespace(content=content), finish_reason=finish_reason)],
        usage=None,
    )


class FakeStream:
    def __init__(self, chunks) -> None:
        self.chunks = chunks

    async def __aiter__(self):
        for chunk in self.chunks:
            yield chunk


class FakeCompletions:
    def __init__(self, response) -> None:
        self.response = response
        self.kwargs = {}

    async def create(self, **kwargs):
        self.kwargs = kwargs
        return self.response


class FakeClient:
    def __init__(self, response) -> None:
        self.chat = SimpleNamespace(completions=FakeCompletions(response))


PAYLOAD = PromptPayload(
    contents=(
        PromptBlock(role="user", parts=("context", "rules")),
        PromptBlock(role="user", parts=("Question?",)),
    )
)


def test_chunk_fragment_extracts_delta_text() -> None:
    assert ChunkFragment(_chunk("Hello")).text() == "Hello"
    assert ChunkFragment(_chunk(None, finish_reason="stop")).text() == ""


def test_chunk_fragment_rejects_blocked_or_empty_chunks() -> None:
    with pytest.raises(FragmentTextError):
        ChunkFragment(_chunk(None, finish_reason="content_filter")).text()
    with pytest.raises(FragmentTextError):
        ChunkFragment(SimpleNamespace(choices=[], usage=None)).text()


def test_usage_only_chunk_has_no_text() -> None:
    chunk = SimpleNamespace(choices=[], usage=SimpleNamespace(total_tokens=12))
    assert ChunkFragment(chunk).text() == ""


def test_stream_sends_generation_parameters_and_yields_fragments() -> None:
    settings = Settings(gemini_model="test-model", max_tokens=64, temperature=0.2, top_p=0.8, top_k=20)
    client = FakeClient(FakeStream([_chunk("Hi"), _chunk(" there.")]))
    backend = OpenAICompatibleBackend(settings, client=client)

    async def collect():
        fragments = await backend.stream(PAYLOAD)
        return [fragment.text() async for fragment in fragments]

    assert asyncio.run(collect()) == ["Hi", " there."]
    kwargs = client.chat.completions.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["stream"] is True
    assert kwargs["max_tokens"] == 64
    assert kwargs["temperature"] == 0.2
    assert kwargs["top_p"] == 0.8
    assert kwargs["extra_body"] == {"top_k": 20}
    assert kwargs["messages"][0] == {"role": "user", "content": "context\n\nrules"}


def test_non_stream_response_is_rejected() -> None:
    backend = OpenAICompatibleBackend(Settings(), client=FakeClient(None))

    with pytest.raises(BackendRejectedError):
        asyncio.run(backend.stream(PAYLOAD))


def test_stream_skips_chunks_without_text() -> None:
    chunks = [
        _chunk(""),
        _chunk("Hello"),
        SimpleNamespace(choices=[], usage=SimpleNamespace(total_tokens=9)),
        _chunk(None, finish_reason="stop"),
        _chunk(None, finish_reason="content_filter"),
    ]
    backend = OpenAICompatibleBackend(Settings(), client=FakeClient(FakeStream(chunks)))

    async def collect():
        return [fragment async for fragment in await backend.stream(PAYLOAD)]

    fragments = asyncio.run(collect())

    assert len(fragments) == 2
    assert fragments[0].text() == "Hello"
    with pytest.raises(FragmentTextError):
        fragments[1].text()


def test_backend_without_api_key_builds_but_rejects_requests() -> None:
    backend = OpenAICompatibleBackend(Settings(google_api_key=None))

    with pytest.raises(BackendRejectedError):
        asyncio.run(backend.stream(PAYLOAD))
