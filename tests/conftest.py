from __future__ import annotations

import asyncio
import json
import socket
from typing import Any

import pytest


class FakePeer:
    """Scripted remote UI peer.

    Records every frame the client writes and answers each ``question``
    frame with the next scripted reply. ``bytes`` replies are sent as-is,
    anything else is JSON-encoded. A ``None`` reply hangs up instead.
    """

    def __init__(self, replies: list[Any] | None = None):
        self.replies = list(replies or [])
        self.frames: list[dict[str, Any]] = []
        self.connections = 0
        self.port = 0
        self._server: asyncio.AbstractServer | None = None
        self._done: asyncio.Event | None = None

    @property
    def errors(self) -> list[dict[str, Any]]:
        return [f for f in self.frames if f.get("type") == "error"]

    @property
    def questions(self) -> list[dict[str, Any]]:
        return [f for f in self.frames if f.get("type") == "question"]

    async def __aenter__(self) -> FakePeer:
        self._done = asyncio.Event()
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        self.port = self._server.sockets[0].getsockname()[1]
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        assert self._server is not None
        self._server.close()
        await self._server.wait_closed()

    async def wait_disconnect(self, timeout: float = 5.0) -> None:
        assert self._done is not None
        await asyncio.wait_for(self._done.wait(), timeout)

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        self.connections += 1
        try:
            while True:
                line = await reader.readline()
                if not line:
                    break
                frame = json.loads(line)
                self.frames.append(frame)
                if frame.get("type") == "question" and self.replies:
                    reply = self.replies.pop(0)
                    if reply is None:
                        break
                    data = reply if isinstance(reply, bytes) else json.dumps(reply).encode()
                    writer.write(data)
                    await writer.drain()
        finally:
            writer.close()
            assert self._done is not None
            self._done.set()


@pytest.fixture()
def fake_peer():
    return FakePeer


@pytest.fixture()
def unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
