"""
Pytest fixtures for MindFlow tests.
"""

import copy
import json
from typing import AsyncGenerator, List, Union

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mindflow.ai.completion_client import CompletionClient
from mindflow.api.deps import get_completion_client
from mindflow.main import app
from mindflow.schemas.curriculum import Curriculum


UPSTREAM_URL = "https://upstream.test/chat/completions"

PHOTOSYNTHESIS = {
    "topic": "Photosynthesis",
    "difficulty": "Undergraduate Student",
    "introduction": "Plants turn light into sugar. Here is how.",
    "concepts": [
        {
            "id": "c1",
            "title": "Light Reactions",
            "definition": "Reactions in the thylakoid that capture light energy.",
            "analogy": "Solar panels charging a battery.",
            "keyTakeaway": "Light becomes ATP and NADPH.",
        },
        {
            "id": "c2",
            "title": "Calvin Cycle",
            "definition": "Carbon fixation in the stroma.",
            "analogy": "A factory assembly line.",
            "keyTakeaway": "CO2 becomes sugar.",
        },
    ],
    "flowchart": {
        "nodes": [
            {"id": "light", "label": "Sunlight", "description": "Photons arrive", "stepOrder": 1},
            {"id": "water", "label": "Water", "description": "Split for electrons", "stepOrder": 2},
            {"id": "co2", "label": "CO2", "description": "Taken from air", "stepOrder": 2},
            {"id": "sugar", "label": "Glucose", "description": "Stored energy", "stepOrder": 3},
        ],
        "edges": [
            {"from": "light", "to": "water", "label": "excites"},
            {"from": "light", "to": "co2"},
            {"from": "water", "to": "sugar"},
            {"from": "co2", "to": "sugar", "label": "fixed into"},
            {"from": "sugar", "to": "ghost"},
        ],
    },
    "quiz": [
        {
            "id": f"q{i + 1}",
            "question": f"Question {i + 1}?",
            "options": ["A", "B", "C", "D"],
            "correctIndex": i % 4,
            "explanation": "Because.",
        }
        for i in range(5)
    ],
}


def completion_envelope(content: str) -> dict:
    """Upstream chat-completion response carrying `content`."""
    return {
        "id": "cmpl-test",
        "model": "sonar",
        "object": "chat.completion",
        "choices": [
            {"index": 0, "finish_reason": "stop", "message": {"role": "assistant", "content": content}},
        ],
    }


class StubUpstream:
    """Scripted stand-in for the completion API, served through httpx.MockTransport."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._script: List[Union[httpx.Response, Exception]] = []

    def returns_content(self, content: str) -> "StubUpstream":
        self._script.append(httpx.Response(200, json=completion_envelope(content)))
        return self

    def returns_json(self, document) -> "StubUpstream":
        return self.returns_content(json.dumps(document))

    def returns_envelope(self, envelope: dict) -> "StubUpstream":
        self._script.append(httpx.Response(200, json=envelope))
        return self

    def returns_status(self, status_code: int, text: str = "") -> "StubUpstream":
        self._script.append(httpx.Response(status_code, text=text))
        return self

    def raises(self, exc: Exception) -> "StubUpstream":
        self._script.append(exc)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._script:
            return httpx.Response(500, text="no scripted response")
        item = self._script.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def sent_body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def curriculum_payload() -> dict:
    """Camel-case curriculum document as the model returns it."""
    return copy.deepcopy(PHOTOSYNTHESIS)


@pytest.fixture
def curriculum(curriculum_payload: dict) -> Curriculum:
    return Curriculum.model_validate(curriculum_payload)


@pytest.fixture
def stub_upstream() -> StubUpstream:
    return StubUpstream()


@pytest_asyncio.fixture
async def completion_client(stub_upstream: StubUpstream) -> AsyncGenerator[CompletionClient, None]:
    """Completion client wired to the stub upstream."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(stub_upstream.handler)) as http:
        yield CompletionClient(http, api_key="test-key", api_url=UPSTREAM_URL, model="sonar")


@pytest_asyncio.fixture
async def app_client(stub_upstream: StubUpstream) -> AsyncGenerator[AsyncClient, None]:
    """In-process client for the API, with the completion API stubbed out."""

    async def override_completion_client() -> AsyncGenerator[CompletionClient, None]:
        async with httpx.AsyncClient(transport=httpx.MockTransport(stub_upstream.handler)) as http:
            yield CompletionClient(http, api_key="test-key", api_url=UPSTREAM_URL, model="sonar")

    app.dependency_overrides[get_completion_client] = override_completion_client
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_completion_client, None)
