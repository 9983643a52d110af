from __future__ import annotations

import json
import os
from typing import Iterator

from websockets.exceptions import InvalidHandshake
from websockets.sync.client import connect

from app.assistant.schema import AskRequest, ConversationThread, StreamEvent

WS_URL = os.getenv("WS_URL", "ws://localhost:8000/ws/chat")


def stream_answer(question: str, thread: ConversationThread, url: str = WS_URL) -> Iterator[str]:
    request = AskRequest(question=question, history=thread.history())
    with connect(url, open_timeout=15) as ws:
        ws.send(request.model_dump_json())
        while True:
            event = StreamEvent.model_validate(json.loads(ws.recv()))
            if event.event == "stream-response":
                yield event.data or ""
            elif event.event == "stream-end":
                return
            else:
                raise RuntimeError(event.data or "The assistant could not answer.")


def socket_status(url: str = WS_URL, timeout_s: float = 3.0) -> str:
    try:
        with connect(url, open_timeout=timeout_s):
            return "connected"
    except (OSError, TimeoutError, InvalidHandshake) as exc:
        return f"disconnected ({exc.__class__.__name__})"
