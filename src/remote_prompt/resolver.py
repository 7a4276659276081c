"""Resolve a question's computed fields against the answers collected so far."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from remote_prompt.question import DYNAMIC_FIELDS, AnswerSet, Computed, Question, Static

logger = logging.getLogger(__name__)


def resolve_fields(
    question: Question,
    answers: AnswerSet,
    names: Iterable[str] = DYNAMIC_FIELDS,
) -> Question:
    """Replace every ``Computed`` field of ``question`` with its ``Static`` result.

    The question is rewritten in place and returned. Static fields are left
    untouched, so resolving an already-resolved question is a no-op.
    """
    for field_name in names:
        current = getattr(question, field_name)
        if isinstance(current, Computed):
            setattr(question, field_name, Static(current(answers)))
            logger.debug("resolved %s.%s", question.name, field_name)
    return question
