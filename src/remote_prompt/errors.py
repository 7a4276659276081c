from __future__ import annotations

from uuid import uuid4

ERROR_PARSE = "ERROR_PARSE"
ERROR_VALIDATE = "ERROR_VALIDATE"


def new_trace_id() -> str:
    return uuid4().hex


class PromptError(Exception):
    def __init__(self, message: str, *, error_type: str, trace_id: str | None = None) -> None:
        self.error_type = error_type
        self.trace_id = trace_id or new_trace_id()
        super().__init__(message)

    def with_trace(self) -> str:
        return f"{self.args[0]} (trace_id={self.trace_id})"


class PromptConnectionError(PromptError, ConnectionError):
    def __init__(self, message: str, *, trace_id: str | None = None) -> None:
        super().__init__(message, error_type="connection", trace_id=trace_id)


class ParseError(PromptError):
    def __init__(self, message: str, *, trace_id: str | None = None) -> None:
        super().__init__(message, error_type="parse", trace_id=trace_id)


class ValidationError(PromptError):
    def __init__(
        self,
        message: str,
        *,
        question: str | None = None,
        trace_id: str | None = None,
    ) -> None:
        self.question = question
        super().__init__(message, error_type="validate", trace_id=trace_id)


__all__ = [
    "ERROR_PARSE",
    "ERROR_VALIDATE",
    "new_trace_id",
    "PromptError",
    "PromptConnectionError",
    "ParseError",
    "ValidationError",
]
