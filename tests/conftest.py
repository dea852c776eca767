import asyncio

import httpx
import pytest

from app.clients.sheetdb import SheetDBClient


class Recorder:
    """Collects the requests seen by a MockTransport handler."""

    def __init__(self):
        self.requests = []

    def sheets(self):
        return [r.url.params.get("sheet") for r in self.requests]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_client(recorder):
    clients = []

    def _make(handler):
        async def _recording(request: httpx.Request):
            recorder.requests.append(request)
            result = handler(request)
            if hasattr(result, "__await__"):
                result = await result
            return result

        client = SheetDBClient(
            base_url="https://sheetdb.test/api/v1/abc",
            transport=httpx.MockTransport(_recording),
        )
        clients.append(client)
        return client

    yield _make

    # teardown runs outside the test's event loop
    for client in clients:
        if not client.client.is_closed:
            asyncio.run(client.aclose())
