"""In-memory stand-ins for the file server used across the test suite."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from hfsync.exceptions import HTTPStatusError


class FakeStream:
    """Mimics aiohttp.StreamReader.read(n) over an in-memory body."""

    def __init__(self, body: bytes, fail_after: int | None = None, error: Exception | None = None):
        self._body = body
        self._pos = 0
        self._fail_after = fail_after
        self._error = error
        self.reads: list[int] = []

    async def read(self, n: int = -1) -> bytes:
        if self._fail_after is not None and self._pos >= self._fail_after:
            raise self._error
        if n < 0:
            n = len(self._body) - self._pos
        if self._fail_after is not None:
            n = min(n, self._fail_after - self._pos)
        chunk = self._body[self._pos : self._pos + n]
        self._pos += len(chunk)
        self.reads.append(len(chunk))
        return chunk


class FakeResponse:
    def __init__(self, stream: FakeStream):
        self.content = stream
        self.status = 200


class FakeClient:
    """
    Serves files from a dict. A value may be bytes, an int status code, or a
    FakeStream for custom failure behaviour.
    """

    def __init__(self, files: dict[str, Any] | None = None):
        self.files = dict(files or {})
        self.requests: list[str] = []

    def build_url(self, relative_path: str) -> str:
        return f"http://fake:80/{relative_path}"

    @asynccontextmanager
    async def fetch(self, relative_path: str):
        self.requests.append(relative_path)
        body = self.files.get(relative_path, 404)
        if isinstance(body, int):
            raise HTTPStatusError(body, "Not Found" if body == 404 else "Error")
        stream = body if isinstance(body, FakeStream) else FakeStream(body)
        yield FakeResponse(stream)

    async def close(self) -> None:
        pass




class VirtualClock:
    """A monotonic clock that only moves when something sleeps or works."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
