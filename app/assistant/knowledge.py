from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from app.assistant.prompts import NO_DATA_PLACEHOLDER
from app.core.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=4)
def load_knowledge_document(path: Path) -> str:
    resolved = Path(path).expanduser().resolve()
    try:
        content = resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to load HR data from %s: %s", resolved, exc)
        return NO_DATA_PLACEHOLDER

    logger.info("Loaded HR data from %s (%d characters)", resolved, len(content))
    return content
