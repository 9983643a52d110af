from __future__ import annotations

from typing import Sequence

from app.assistant.errors import QuestionValidationError
from app.assistant.prompts import (
    EMPTY_QUESTION_MESSAGE,
    HISTORY_ACKNOWLEDGEMENT,
    KNOWLEDGE_INTRO,
    SYSTEM_INSTRUCTIONS,
)
from app.assistant.schema import ConversationMessage, PromptBlock, PromptPayload

DEFAULT_HISTORY_LIMIT = 10


def _is_blank(text: str | None) -> bool:
    return not text or not text.strip()


def recent_history(
    history: Sequence[ConversationMessage] | None,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> list[ConversationMessage]:
    """Keep the last ``limit`` turns in order, then drop the empty ones."""
    if not history or limit <= 0:
        return []
    return [msg for msg in list(history)[-limit:] if not _is_blank(msg.content)]


def build_prompt(
    question: str,
    knowledge: str,
    history: Sequence[ConversationMessage] | None = None,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
) -> PromptPayload:
    if _is_blank(question):
        raise QuestionValidationError(EMPTY_QUESTION_MESSAGE)

    contents: list[PromptBlock] = [
        PromptBlock(
            role="user",
            parts=(KNOWLEDGE_INTRO.format(knowledge=knowledge), *SYSTEM_INSTRUCTIONS),
        )
    ]

    if history:
        contents.append(PromptBlock(role="assistant", parts=(HISTORY_ACKNOWLEDGEMENT,)))
        contents.extend(
            PromptBlock(role=msg.role, parts=(msg.content,))
            for msg in recent_history(history, history_limit)
        )

    contents.append(PromptBlock(role="user", parts=(question,)))
    return PromptPayload(contents=tuple(contents))
