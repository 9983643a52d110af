from __future__ import annotations

from functools import lru_cache
from time import perf_counter
from typing import Sequence

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from app.assistant.ask import ask_bot
from app.assistant.backend import GenerationBackend, OpenAICompatibleBackend
from app.assistant.relay import StreamState
from app.assistant.schema import AskRequest, AskResponse, ConversationMessage, EventName, StreamEvent
from app.assistant.sinks import COMPLETION_EVENT, ERROR_EVENT, UPDATE_EVENT, CollectingSink, EventSink
from app.core.config import Settings, get_settings
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


class WebSocketSink:
    """Sends relay events to one WebSocket client as JSON messages."""

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket
        self.closed = False

    async def _emit(self, event: StreamEvent) -> None:
        if self.closed:
            return
        try:
            await self.websocket.send_json(event.model_dump())
        except (WebSocketDisconnect, RuntimeError) as exc:
            self.closed = True
            logger.info("Client went away while sending %s: %s", event.event, exc)

    async def send_update(self, text: str) -> None:
        await self._emit(StreamEvent(event=UPDATE_EVENT, data=text))

    async def send_completion(self) -> None:
        await self._emit(StreamEvent(event=COMPLETION_EVENT))

    async def send_error(self, message: str, event: EventName = ERROR_EVENT) -> None:
        await self._emit(StreamEvent(event=event, data=message))


class ChatService:
    def __init__(self, settings: Settings, backend: GenerationBackend | None = None) -> None:
        self.settings = settings
        self.backend = backend or OpenAICompatibleBackend(settings)

    def health(self) -> dict[str, str]:
        return {"status": "ok", "model": self.settings.gemini_model}

    async def stream(
        self,
        sink: EventSink,
        question: str,
        history: Sequence[ConversationMessage] | None = None,
    ) -> StreamState | None:
        return await ask_bot(sink, question, history, settings=self.settings, backend=self.backend)

    async def ask(self, request: AskRequest) -> AskResponse:
        started = perf_counter()
        sink = CollectingSink()
        await self.stream(sink, request.question, request.history)
        return AskResponse(
            answer=sink.text,
            events=sink.events,
            latency_ms=(perf_counter() - started) * 1000,
        )


@lru_cache(maxsize=1)
def get_chat_service() -> ChatService:
    settings = get_settings()
    return ChatService(settings)


@router.get("/health")
def health() -> dict[str, str]:
    return get_chat_service().health()


@router.post("/ask", response_model=AskResponse)
async def ask(request: AskRequest) -> AskResponse:
    return await get_chat_service().ask(request)


@router.websocket("/ws/chat")
async def chat_socket(websocket: WebSocket) -> None:
    await websocket.accept()
    service = get_chat_service()
    sink = WebSocketSink(websocket)

    try:
        while not sink.closed:
            try:
                request = AskRequest.model_validate(await websocket.receive_json())
            except (ValidationError, ValueError, KeyError, TypeError) as exc:
                logger.warning("Malformed chat message: %s", exc)
                await sink.send_error("Malformed request.")
                continue
            await service.stream(sink, request.question, request.history)
    except WebSocketDisconnect:
        logger.info("Chat client disconnected")
