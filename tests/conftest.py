"""Shared fixtures: a Dispatcher wired to an in-memory CKAN double."""

import asyncio
import json

import httpx
import pytest

from datagov.client import DataGovClient
from datagov.dispatcher import Dispatcher

BASE_URL = "https://catalog.test/api/3"


class FakeCKAN:
    """Serves canned responses and records every request it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, tuple] = {}
        self.error: Exception | None = None

    def reply(self, path_or_url: str, status: int = 200, *, json_body=None, content=b"", headers=None):
        if json_body is not None:
            content = json.dumps(json_body).encode()
            headers = {"content-type": "application/json", **(headers or {})}
        self.routes[path_or_url] = (status, content, headers)

    def fail_with(self, error: Exception):
        self.error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            if isinstance(self.error, httpx.RequestError):
                self.error.request = request
            raise self.error
        url = str(request.url).split("?")[0]
        for key in (url, request.url.path):
            if key in self.routes:
                status, content, headers = self.routes[key]
                return httpx.Response(status, content=content, headers=headers)
        return httpx.Response(404, json={"success": False, "error": {"message": "Not found"}})


@pytest.fixture
def ckan():
    return FakeCKAN()


@pytest.fixture
def dispatcher(ckan):
    client = DataGovClient(BASE_URL, transport=httpx.MockTransport(ckan))
    yield Dispatcher(client=client)
    asyncio.run(client.aclose())
