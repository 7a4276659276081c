"""Validate and filter answers returned for a question."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from remote_prompt.question import Question


@dataclass(frozen=True)
class Accepted:
    value: Any
    ok: bool = True


@dataclass(frozen=True)
class Rejected:
    reason: str
    ok: bool = False


Outcome = Union[Accepted, Rejected]


def default_reason(question: Question) -> str:
    return f"invalid value for {question.name}"


def validate_answer(question: Question, raw: Any) -> Outcome:
    """Apply ``validate`` then ``filter`` to a raw answer.

    Only a ``validate`` result of exactly ``True`` accepts. Any other result
    rejects, with the returned string as the reason when it is a non-empty
    string. ``filter`` runs once, on accepted answers only.
    """
    if question.validate is not None:
        verdict = question.validate(raw)
        if verdict is not True:
            if isinstance(verdict, str) and verdict:
                return Rejected(verdict)
            return Rejected(default_reason(question))

    if question.filter is not None:
        return Accepted(question.filter(raw))
    return Accepted(raw)
