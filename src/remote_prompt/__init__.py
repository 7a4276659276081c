"""Collect answers to CLI questions locally or through a remote UI peer."""

from remote_prompt.config import SessionConfig
from remote_prompt.errors import (
    ERROR_PARSE,
    ERROR_VALIDATE,
    ParseError,
    PromptConnectionError,
    PromptError,
    ValidationError,
)
from remote_prompt.facade import prompt, socket_message
from remote_prompt.question import AnswerSet, Computed, Question, Static

__all__ = [
    "AnswerSet",
    "Computed",
    "ERROR_PARSE",
    "ERROR_VALIDATE",
    "ParseError",
    "PromptConnectionError",
    "PromptError",
    "Question",
    "SessionConfig",
    "Static",
    "ValidationError",
    "prompt",
    "socket_message",
]
