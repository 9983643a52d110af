from __future__ import annotations

import logging
from time import perf_counter
from typing import Optional


def setup_logging(level: str = "INFO") -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name if name else "hr-assistant")


class OperationTimer:
    """Logs the steps of one request with the time elapsed since it started."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or get_logger()
        self.started = perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (perf_counter() - self.started) * 1000

    def log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, "[%.1f ms] %s", self.elapsed_ms, message)
