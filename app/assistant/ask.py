from __future__ import annotations

from typing import Sequence

from app.assistant.assembler import build_prompt
from app.assistant.backend import GenerationBackend, OpenAICompatibleBackend
from app.assistant.errors import BackendRejectedError, QuestionValidationError
from app.assistant.knowledge import load_knowledge_document
from app.assistant.prompts import STREAM_FAILURE_MESSAGE
from app.assistant.relay import StreamState, relay_stream
from app.assistant.schema import ConversationMessage
from app.assistant.sinks import BACKEND_ERROR_EVENT, EventSink
from app.core.config import Settings
from app.core.logging import OperationTimer, get_logger

logger = get_logger(__name__)


async def ask_bot(
    sink: EventSink,
    question: str,
    history: Sequence[ConversationMessage] | None = None,
    *,
    settings: Settings,
    backend: GenerationBackend | None = None,
    knowledge: str | None = None,
) -> StreamState | None:
    """Answer one HR question, streaming the reply into ``sink``.

    Every failure ends up as a channel event; nothing is raised to the caller.
    Returns the relay state, or None when the relay never started.
    """
    timer = OperationTimer(logger)
    timer.log(f"Question received: {question!r}")
    timer.log(f"Conversation history: {len(history or [])} messages")

    try:
        if knowledge is None:
            knowledge = load_knowledge_document(settings.data_path)
        try:
            payload = build_prompt(question, knowledge, history, settings.history_limit)
        except QuestionValidationError as exc:
            timer.log(f"Rejected question: {exc}")
            await sink.send_error(str(exc))
            return None

        timer.log(f"Sending prompt with {len(payload)} blocks")
        backend = backend or OpenAICompatibleBackend(settings)
        fragments = await backend.stream(payload)
        if fragments is None:
            raise BackendRejectedError("Backend returned no stream")
        return await relay_stream(fragments, sink, timer)
    except Exception as exc:
        timer.log(f"Error: {exc}")
        logger.debug("ask_bot failure", exc_info=True)
        try:
            await sink.send_error(STREAM_FAILURE_MESSAGE, event=BACKEND_ERROR_EVENT)
        except Exception:
            logger.exception("Could not report the failure to the output channel")
        return None
