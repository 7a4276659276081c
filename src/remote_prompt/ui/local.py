"""Local terminal prompting through questionary.

``LocalPromptSession`` asks questions one at a time with questionary's
widgets and keeps the live interaction state. ``raw_answers()`` exposes
every question, including the ones hidden by ``when``, which are
recorded with their resolved default (or None).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from prompt_toolkit.styles import Style
from questionary.prompts import prompt_by_name

from remote_prompt.question import AnswerSet, Question
from remote_prompt.resolver import resolve_fields

logger = logging.getLogger(__name__)

TYPE_ALIASES = {
    "input": "text",
    "list": "select",
    "expand": "rawselect",
}

TEXT_WIDGETS = {"text", "password", "path", "autocomplete"}

# Question extras that questionary widgets understand
WIDGET_OPTIONS = {"qmark", "instruction", "multiline", "pointer", "use_shortcuts", "only_directories"}


def get_custom_style() -> Style:
    return Style(
        [
            ("qmark", "fg:#673ab7 bold"),
            ("question", "bold"),
            ("pointer", "fg:#673ab7 bold"),
            ("highlighted", "fg:#673ab7 bold"),
            ("selected", "fg:#cc5454"),
        ]
    )


class LocalPromptSession:
    """Interactive session backed by questionary."""

    def __init__(self, style: Style | None = None, **prompt_kwargs: Any):
        self._style = style or get_custom_style()
        self._prompt_kwargs = prompt_kwargs
        self._answers = AnswerSet()
        self._raw: dict[str, Any] = {}

    def answers(self) -> AnswerSet:
        """Answers for questions that were actually asked."""
        return self._answers

    def raw_answers(self) -> dict[str, Any]:
        """Every question seen so far, hidden ones included."""
        return dict(self._raw)

    async def run(self, questions: Sequence[Question]) -> dict[str, Any]:
        for q in questions:
            if not q.is_visible(self._answers):
                resolve_fields(q, self._answers, names=("default",))
                self._raw[q.name] = q.value_of("default")
                logger.debug("question %s hidden, recorded default", q.name)
                continue

            resolve_fields(q, self._answers)
            answer = await self._ask(q)
            if q.filter is not None:
                answer = q.filter(answer)
            self._answers[q.name] = answer
            self._raw[q.name] = answer
        return self.raw_answers()

    async def _ask(self, q: Question) -> Any:
        widget = TYPE_ALIASES.get(q.type, q.type)
        create = prompt_by_name(widget)
        if create is None:
            raise ValueError(f"Unknown question type '{q.type}' for '{q.name}'")

        kwargs: dict[str, Any] = dict(self._prompt_kwargs)
        kwargs["message"] = q.value_of("message") or q.name
        kwargs["style"] = self._style
        if q.choices is not None:
            kwargs["choices"] = q.value_of("choices")
        default = q.value_of("default")
        if default is not None:
            kwargs["default"] = str(default) if widget in TEXT_WIDGETS else default
        if q.validate is not None:
            kwargs["validate"] = q.validate
        kwargs.update({k: v for k, v in q.extra.items() if k in WIDGET_OPTIONS})

        answer = await create(**kwargs).ask_async()
        if answer is None:
            # questionary swallows Ctrl-C and returns None
            raise KeyboardInterrupt
        return answer
