from __future__ import annotations


class AssistantError(Exception):
    """Base error for the HR assistant request path."""


class QuestionValidationError(AssistantError, ValueError):
    pass


class BackendRejectedError(AssistantError):
    """The model backend refused the request or returned no stream."""
