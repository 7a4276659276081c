"""Drive the question/answer exchange with a remote peer.

State machine::

    IDLE -> CONNECTING -> EXCHANGING -> DONE
                 |             |
                 +-----> FAILED <-+

Single-question mode sends one question per exchange. Bundle mode sends
each planned bundle in one exchange and commits its answers only once all
of them have been validated.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from enum import Enum
from typing import Any, NoReturn

from remote_prompt.bundles import Bundle, plan_bundles
from remote_prompt.config import SessionConfig
from remote_prompt.errors import ERROR_VALIDATE, ValidationError
from remote_prompt.log import log_session
from remote_prompt.question import AnswerSet, Question
from remote_prompt.resolver import resolve_fields
from remote_prompt.transport import SocketSession
from remote_prompt.validator import Rejected, validate_answer

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    EXCHANGING = "exchanging"
    DONE = "done"
    FAILED = "failed"


class PromptOrchestrator:
    """Collects answers for one ``prompt`` call over one socket session."""

    def __init__(self, config: SessionConfig, session: SocketSession | None = None):
        self.config = config
        self.session = session or SocketSession(
            host=config.host,
            port=config.port,
            read_limit=config.read_limit,
        )
        self.state = SessionState.IDLE
        self.answers = AnswerSet()

    @property
    def mode(self) -> str:
        return "bundle" if self.config.bundle else "single"

    async def run(self, questions: Sequence[Question]) -> AnswerSet:
        """Ask ``questions`` through the peer and return the collected answers.

        The socket is always closed before this returns or raises. On
        failure ``self.answers`` holds whatever was committed before the
        error.
        """
        _check_unique_names(questions)
        start = time.monotonic()
        error = ""
        self.state = SessionState.CONNECTING
        try:
            await self.session.open()
            self.state = SessionState.EXCHANGING
            if self.config.bundle:
                await self._ask_bundles(questions)
            else:
                await self._ask_singly(questions)
            self.state = SessionState.DONE
        except Exception as e:
            self.state = SessionState.FAILED
            error = str(e)
            raise
        finally:
            await self.session.close()
            log_session(
                mode=self.mode,
                state=self.state.value,
                answer_count=len(self.answers),
                elapsed_s=time.monotonic() - start,
                error=error,
            )
        return self.answers

    async def _ask_singly(self, questions: Sequence[Question]) -> None:
        for question in questions:
            if not question.is_visible(self.answers):
                logger.debug("skipping hidden question %s", question.name)
                continue

            resolve_fields(question, self.answers)
            await self.session.send({"type": "question", "question": question.to_wire()})

            raw = await self.session.receive_once()
            self.answers[question.name] = await self._accept(question, raw)

    async def _ask_bundles(self, questions: Sequence[Question]) -> None:
        for bundle in plan_bundles(questions):
            request = self._build_request(bundle)
            if not request:
                continue

            await self.session.send({
                "type": "question",
                "question": [q.to_wire() for q in request],
            })

            response = await self.session.receive_once(require_object=True)
            by_name = {q.name: q for q in request}
            staged: dict[str, Any] = {}
            for key, raw in response.items():
                question = by_name.get(key)
                if question is None:
                    await self._reject(key, f"unexpected answer for {key}")
                staged[key] = await self._accept(question, raw)
            self.answers.commit(staged)

    def _build_request(self, bundle: Bundle) -> list[Question]:
        request: list[Question] = []
        for question in bundle:
            if not question.is_visible(self.answers):
                logger.debug("skipping hidden question %s", question.name)
                continue
            request.append(resolve_fields(question, self.answers))
        return request

    async def _accept(self, question: Question, raw: Any) -> Any:
        outcome = validate_answer(question, raw)
        if isinstance(outcome, Rejected):
            await self._reject(question.name, outcome.reason)
        return outcome.value

    async def _reject(self, name: str, reason: str) -> NoReturn:
        await self.session.send_error(ERROR_VALIDATE, f"validate error: {reason}")
        raise ValidationError(reason, question=name)


def _check_unique_names(questions: Sequence[Question]) -> None:
    seen: set[str] = set()
    for question in questions:
        if question.name in seen:
            raise ValueError(f"Duplicate question name: '{question.name}'")
        seen.add(question.name)
