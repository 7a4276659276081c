"""Public entry points: ``prompt`` and ``socket_message``.

``prompt`` asks questions over a socket when ``options.socket`` is set and
through the local questionary session otherwise. Both entry points either
return/raise, or, when given a callback, report ``callback(error, result)``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from remote_prompt.config import SessionConfig
from remote_prompt.errors import PromptError
from remote_prompt.orchestrator import PromptOrchestrator
from remote_prompt.question import as_questions
from remote_prompt.transport import SocketSession
from remote_prompt.ui.local import LocalPromptSession

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException], Any], Any]
Options = Union[Mapping[str, Any], SessionConfig, None]


async def prompt(
    questions: Any,
    options: Options | Callback = None,
    callback: Callback | None = None,
) -> Any:
    """Collect answers for ``questions``.

    ``prompt(questions, callback)`` is accepted: a callable in the options
    position is taken as the callback and options default to empty.
    """
    if callable(options) and callback is None:
        callback, options = options, None
    config = SessionConfig.from_options(options)  # type: ignore[arg-type]
    items = as_questions(questions)

    if config.socket:
        orchestrator = PromptOrchestrator(config)
        try:
            answers = await orchestrator.run(items)
        except Exception as e:
            if isinstance(e, PromptError):
                logger.warning("prompt over socket failed: %s", e.with_trace())
            else:
                logger.warning("prompt over socket failed: %s: %s", type(e).__name__, e)
            if callback is None:
                raise
            return callback(e, orchestrator.answers)
        return _report(callback, answers)

    session = LocalPromptSession()
    try:
        await session.run(items)
    except Exception as e:
        if callback is None:
            raise
        return callback(e, session.raw_answers())
    # Hidden questions are missing from answers() but present in raw_answers()
    return _report(callback, session.raw_answers())


async def socket_message(
    options: Options,
    callback: Callback | None = None,
) -> Any:
    """Send one ``{type, code, message}`` frame to the peer and disconnect.

    The connection is closed before the callback fires.
    """
    config = SessionConfig.from_options(options)
    session = SocketSession(host=config.host, port=config.port, read_limit=config.read_limit)
    frame = config.message_frame()
    error: PromptError | None = None
    try:
        await session.open()
        await session.send(frame)
    except PromptError as e:
        logger.warning("socket message failed: %s", e.with_trace())
        if callback is None:
            raise
        error = e
    finally:
        await session.close()
    if error is not None:
        return callback(error, None)
    return _report(callback, frame)


def _report(callback: Callback | None, result: Any) -> Any:
    if callback is None:
        return result
    return callback(None, result)
