# tests/conftest.py
import json
import os

# No file sink during tests; must be set before src.config is imported
os.environ["LOG_TO_FILE"] = "false"

import httpx
import pytest
from fastapi.testclient import TestClient

from src.api import app, get_settings, get_notion_client
from src.config import Settings
from src.services.notion import NotionClient


class FakeNotion:
    """Records every call made to the Notion API and answers like Notion would."""

    def __init__(self, page_id="page-123"):
        self.page_id = page_id
        self.calls = []
        self.fail_create = False
        self.fail_update = False
        self.raise_on_create = None
        self.raise_on_update = None

    @property
    def methods(self):
        return [method for method, _, _ in self.calls]

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.calls.append((request.method, request.url.path, body))

        if request.method == "POST":
            if self.raise_on_create is not None:
                raise self.raise_on_create
            if self.fail_create:
                return httpx.Response(401, json={
                    "object": "error", "status": 401, "code": "unauthorized",
                    "message": "API token is invalid.",
                })
            return httpx.Response(200, json={"object": "page", "id": self.page_id})

        if self.raise_on_update is not None:
            raise self.raise_on_update
        if self.fail_update:
            return httpx.Response(400, json={
                "object": "error", "status": 400, "code": "validation_error",
                "message": "Priority is not a property that exists.",
            })
        return httpx.Response(200, json={"object": "page", "id": self.page_id})

    def client(self, settings: Settings) -> NotionClient:
        return NotionClient.from_settings(settings, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        NOTION_TOKEN="secret_test",
        NOTION_DATABASE_ID="db-1",
        LOG_TO_FILE=False,
    )


@pytest.fixture
def fake_notion():
    return FakeNotion()


@pytest.fixture
def make_api_client(fake_notion):
    """Builds a TestClient wired to the fake Notion with the given settings."""

    def _make(cfg: Settings) -> TestClient:
        async def override_client():
            async with fake_notion.client(cfg) as client:
                yield client

        app.dependency_overrides[get_settings] = lambda: cfg
        app.dependency_overrides[get_notion_client] = override_client
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(make_api_client, test_settings):
    return make_api_client(test_settings)


@pytest.fixture
def valid_payload():
    return {
        "inspiration_content": "Build a faster cache",
        "priority_result": "high",
        "suggestion_detail": "Prototype an LRU layer",
    }
