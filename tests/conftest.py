"""Pytest fixtures."""
import sys
from pathlib import Path

import httpx
import pytest

# Project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

TOKEN_URL = "https://identity.example.com/connect/token"
TASK_URL = "https://cm.example.com/sitecore/api/datatools/purge/tasks/contacts"


@pytest.fixture
def job_config():
    from xconnect_purge.config import JobConfiguration
    return JobConfiguration(
        token_url=TOKEN_URL,
        task_url=TASK_URL,
        username="sitecore\\purge",
        password="p@ss",
        client_secret="secret",
    )


class FakeApi:
    """Подменный Identity Server + Data Tools: ответы по URL, все запросы записываются."""

    def __init__(self):
        self.requests = []
        self.responses = {
            TOKEN_URL: (200, {"access_token": "tok1", "expires_in": 3600}),
            TASK_URL: (200, {"TaskId": "T-1"}),
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.responses[str(request.url)]
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def form(self, index: int) -> dict:
        from urllib.parse import parse_qsl
        return dict(parse_qsl(self.requests[index].content.decode()))


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def http_client(fake_api):
    with fake_api.client() as c:
        yield c
