import asyncio
import json
from types import SimpleNamespace

import httpx
import pytest

from app.services.gemini import GeminiService
from app.services.podchaser.client import PodchaserClient
from app.services.podchaser.service import PodcastSearchService


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeChat:
    """Stands in for a google-genai AsyncChat; remembers what it was sent."""

    def __init__(self, replies, config=None, delay: float = 0.0):
        self.replies = list(replies)
        self.config = config
        self.delay = delay
        self.sent: list[str] = []

    async def send_message(self, message):
        self.sent.append(message)
        if self.delay:
            await asyncio.sleep(self.delay)
        reply = self.replies.pop(0) if self.replies else "ok"
        if isinstance(reply, Exception):
            raise reply
        return FakeResponse(reply)


class FakeGeminiClient:
    """Mimics the ``client.aio.models`` / ``client.aio.chats`` surface of google-genai."""

    def __init__(self, completions=(), chat_replies=(), delay: float = 0.0, chat_delay: float = 0.0):
        self.completions = list(completions)
        self.chat_replies = list(chat_replies)
        self.delay = delay
        self.chat_delay = chat_delay
        self.completion_calls: list[dict] = []
        self.chats: list[FakeChat] = []
        self.aio = SimpleNamespace(
            models=SimpleNamespace(generate_content=self._generate_content),
            chats=SimpleNamespace(create=self._create_chat),
        )

    async def _generate_content(self, *, model, contents, config):
        self.completion_calls.append({"model": model, "contents": contents, "config": config})
        if self.delay:
            await asyncio.sleep(self.delay)
        completion = self.completions.pop(0)
        if isinstance(completion, Exception):
            raise completion
        return FakeResponse(completion)

    def _create_chat(self, *, model, config, history):
        chat = FakeChat(self.chat_replies, config=config, delay=self.chat_delay)
        self.chats.append(chat)
        return chat


def podcast_item(i: int) -> dict:
    return {
        "id": str(i),
        "title": f"Podcast {i}",
        "description": f"Description {i}",
        "webUrl": f"https://www.podchaser.com/podcasts/{i}",
        "imageUrl": f"https://img.example/{i}.jpg",
    }


def directory_body(items: list[dict]) -> dict:
    return {
        "data": {
            "podcasts": {
                "paginatorInfo": {"currentPage": 1, "hasMorePages": False, "lastPage": 1},
                "data": items,
            }
        }
    }


class DirectoryStub:
    """httpx.MockTransport handler that records GraphQL requests."""

    def __init__(self, response=None):
        self.response = response if response is not None else httpx.Response(200, json=directory_body([]))
        self.requests: list[httpx.Request] = []

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest.fixture
def directory():
    return DirectoryStub()


@pytest.fixture
def search_service(directory):
    client = PodchaserClient(api_key="test-key", transport=httpx.MockTransport(directory))
    return PodcastSearchService(client, first=4, min_rating=4, max_rating=5)


@pytest.fixture
def fake_gemini_client():
    return FakeGeminiClient()


@pytest.fixture
def gemini(fake_gemini_client):
    return GeminiService(client=fake_gemini_client, model="gemini-test", timeout=1.0)
