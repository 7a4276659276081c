"""Group questions into bundles that can be sent in one exchange."""

from __future__ import annotations

from collections.abc import Sequence

from remote_prompt.question import Question

Bundle = list[Question]


def plan_bundles(questions: Sequence[Question]) -> list[Bundle]:
    """Partition ``questions`` into bundles, preserving order.

    A question starts a new bundle when it is the first one or when it has
    a ``when`` function or a computed ``message``/``default``/``choices``.
    Every other question joins the most recent bundle, because it needs no
    answer that isn't already known when that bundle is sent.
    """
    bundles: list[Bundle] = []
    for index, question in enumerate(questions):
        if index == 0 or question.is_dynamic:
            bundles.append([question])
        else:
            bundles[-1].append(question)
    return bundles
