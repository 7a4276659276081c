"""Socket transport to the remote prompt peer.

One ``SocketSession`` owns one TCP connection for the lifetime of a
prompt call. Exchanges strictly alternate: the client writes one frame,
then waits for exactly one inbound data event.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from remote_prompt.errors import ERROR_PARSE, ParseError, PromptConnectionError
from remote_prompt.log import log_exchange

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 22212
DEFAULT_READ_LIMIT = 1024 * 1024


def encode_frame(frame: dict[str, Any]) -> bytes:
    return (json.dumps(frame, separators=(",", ":"), ensure_ascii=False) + "\n").encode("utf-8")


def decode_payload(raw: bytes) -> Any:
    return json.loads(raw.decode("utf-8"))


def _frame_names(frame: dict[str, Any]) -> list[str]:
    question = frame.get("question")
    if isinstance(question, list):
        return [q.get("name", "") for q in question]
    if isinstance(question, dict):
        return [question.get("name", "")]
    return []


class SocketSession:
    """A single outbound connection to the peer."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        read_limit: int = DEFAULT_READ_LIMIT,
    ):
        self.host = host
        self.port = port
        self.read_limit = read_limit
        self.frames_sent = 0
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None

    @property
    def is_open(self) -> bool:
        return self._writer is not None

    async def open(self) -> None:
        try:
            self._reader, self._writer = await asyncio.open_connection(self.host, self.port)
        except OSError as e:
            raise PromptConnectionError(
                f"cannot connect to {self.host}:{self.port}: {e}"
            ) from e
        logger.debug("connected to %s:%s", self.host, self.port)

    async def send(self, frame: dict[str, Any]) -> None:
        """Serialize ``frame`` and write it to the peer."""
        writer = self._require_writer()
        data = encode_frame(frame)
        try:
            writer.write(data)
            await writer.drain()
        except OSError as e:
            raise PromptConnectionError(f"write to peer failed: {e}") from e
        self.frames_sent += 1
        log_exchange("out", str(frame.get("type", "")), len(data), _frame_names(frame))

    async def send_error(self, code: str, message: str) -> None:
        await self.send({"type": "error", "code": code, "message": message})

    async def receive_once(self, require_object: bool = False) -> Any:
        """Wait for one inbound data event and decode it.

        On a decode failure the peer is sent an ``ERROR_PARSE`` frame before
        ``ParseError`` is raised. With ``require_object`` a payload that is
        not a JSON object counts as a decode failure.

        A single ``read()`` of up to ``read_limit`` bytes is one answer. A
        response the peer splits across several writes, or one larger than
        ``read_limit``, arrives truncated and fails to decode.
        """
        if self._reader is None:
            raise PromptConnectionError("session is not open")
        try:
            raw = await self._reader.read(self.read_limit)
        except OSError as e:
            raise PromptConnectionError(f"read from peer failed: {e}") from e
        if not raw:
            raise PromptConnectionError("peer closed the connection")
        log_exchange("in", "answer", len(raw))

        try:
            payload = decode_payload(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            detail = f"parse error: {e}"
            await self.send_error(ERROR_PARSE, detail)
            raise ParseError(detail) from e

        if require_object and not isinstance(payload, dict):
            detail = f"parse error: expected an object, got {type(payload).__name__}"
            await self.send_error(ERROR_PARSE, detail)
            raise ParseError(detail)
        return payload

    async def close(self) -> None:
        writer = self._writer
        if writer is None:
            return
        self._reader = None
        self._writer = None
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            # The peer may already be gone; the connection is closed either way.
            logger.debug("error while closing connection: %s", e)

    async def __aenter__(self) -> SocketSession:
        await self.open()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _require_writer(self) -> asyncio.StreamWriter:
        if self._writer is None:
            raise PromptConnectionError("session is not open")
        return self._writer
