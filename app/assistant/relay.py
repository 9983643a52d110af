from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterable, Protocol

from app.assistant.prompts import STREAM_FAILURE_MESSAGE
from app.assistant.sinks import EventSink
from app.core.logging import OperationTimer, get_logger

logger = get_logger(__name__)

CONTINUATION_MARKER = "..."
SENTENCE_ENDINGS = (".", "?", "!", ")")


class Fragment(Protocol):
    def text(self) -> str:
        ...


class RelayPhase(str, Enum):
    INIT = "init"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED_MIDSTREAM = "failed_midstream"
    FAILED_PRESTREAM = "failed_prestream"
    SIGNALED = "signaled"


@dataclass
class StreamState:
    accumulated_text: str = ""
    fragment_count: int = 0
    last_error: BaseException | None = None
    phase: RelayPhase = RelayPhase.INIT
    # Phase reached before the completion signal went out.
    outcome: RelayPhase | None = None

    @property
    def looks_complete(self) -> bool:
        return self.accumulated_text.strip().endswith(SENTENCE_ENDINGS)


async def relay_stream(
    fragments: AsyncIterable[Fragment],
    sink: EventSink,
    timer: OperationTimer | None = None,
) -> StreamState:
    """Forward every fragment to ``sink`` and close the stream exactly once.

    A fragment whose text cannot be extracted is skipped. When the source
    fails after some text was forwarded, the answer is closed with the
    continuation marker instead of an error, so the user keeps the partial
    answer. When it fails before any text, an error event is sent.
    """
    timer = timer or OperationTimer(logger)
    state = StreamState(phase=RelayPhase.STREAMING)

    try:
        async for fragment in fragments:
            state.fragment_count += 1
            try:
                chunk_text = fragment.text()
            except Exception as exc:
                state.last_error = exc
                timer.log(f"Failed to parse fragment {state.fragment_count}: {exc}")
                continue

            state.accumulated_text += chunk_text
            await sink.send_update(chunk_text)

        state.phase = RelayPhase.COMPLETED
        if state.accumulated_text and not state.looks_complete:
            await sink.send_update(CONTINUATION_MARKER)
        timer.log(f"Streaming finished. Total fragments: {state.fragment_count}")
    except Exception as exc:
        state.last_error = exc
        timer.log(f"Streaming failed: {exc}")
        if state.accumulated_text:
            state.phase = RelayPhase.FAILED_MIDSTREAM
            await sink.send_update(CONTINUATION_MARKER)
        else:
            state.phase = RelayPhase.FAILED_PRESTREAM
            await sink.send_error(STREAM_FAILURE_MESSAGE)
    finally:
        if state.last_error is not None:
            timer.log(f"Closing stream after error: {state.last_error}")
        state.outcome = state.phase
        state.phase = RelayPhase.SIGNALED
        await sink.send_completion()

    return state
