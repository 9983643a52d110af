"""Output channels the stream relay reports to.

A sink receives three kinds of named events: incremental text updates, the
terminal completion signal and error messages. The relay never waits for the
client on the other side of a sink to acknowledge anything.

Sinks should not raise when the client goes away; ``WebSocketSink`` logs and
drops events instead. A sink that does raise still cannot make ``ask_bot``
raise.
"""

from __future__ import annotations

from typing import Protocol

from app.assistant.schema import EventName, StreamEvent

UPDATE_EVENT: EventName = "stream-response"
COMPLETION_EVENT: EventName = "stream-end"
ERROR_EVENT: EventName = "error"
BACKEND_ERROR_EVENT: EventName = "stream-error"


class EventSink(Protocol):
    async def send_update(self, text: str) -> None:
        ...

    async def send_completion(self) -> None:
        ...

    async def send_error(self, message: str, event: EventName = ERROR_EVENT) -> None:
        ...


class CollectingSink:
    """Keeps every event in memory, in the order it was sent."""

    def __init__(self) -> None:
        self.events: list[StreamEvent] = []

    async def send_update(self, text: str) -> None:
        self.events.append(StreamEvent(event=UPDATE_EVENT, data=text))

    async def send_completion(self) -> None:
        self.events.append(StreamEvent(event=COMPLETION_EVENT))

    async def send_error(self, message: str, event: EventName = ERROR_EVENT) -> None:
        self.events.append(StreamEvent(event=event, data=message))

    @property
    def updates(self) -> list[str]:
        return [e.data or "" for e in self.events if e.event == UPDATE_EVENT]

    @property
    def text(self) -> str:
        return "".join(self.updates)

    def count(self, event: EventName) -> int:
        return sum(1 for e in self.events if e.event == event)
