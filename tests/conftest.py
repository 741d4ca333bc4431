"""Shared fixtures: fake embedding service and fake Qdrant behind httpx.MockTransport."""

import json

import httpx
import pytest

from docsearch.config import (
    ApiConfig, AppConfig, EmbeddingConfig, SearchConfig, VectorIndexConfig
)


VECTOR = [0.12, -0.5, 0.33]


def make_hit(href, score=0.9, title="Page", text="Some indexed text", category="guides"):
    """Build a Qdrant scored point as returned by /points/search."""
    payload = {"text": text, "category": category}
    if href is not None:
        payload["href"] = href
    if title is not None:
        payload["title"] = title
    return {"id": href or "no-href", "version": 1, "score": score, "payload": payload}


class FakeServices:
    """Routes requests to canned embedding / search / count responses."""

    def __init__(self):
        self.embedding_response = {"success": True, "result": {"embeddings": [VECTOR]}}
        self.embedding_error = None
        self.points = []
        self.search_status = 200
        self.search_error = None
        self.count_response = {"result": {"count": 42}, "status": "ok"}
        self.count_status = 200
        self.requests = []
        self.transport = httpx.MockTransport(self.handler)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.endswith("/api/v1/invoke"):
            if self.embedding_error:
                raise self.embedding_error("embedding backend down", request=request)
            return httpx.Response(200, json=self.embedding_response)

        if path.endswith("/points/search"):
            if self.search_error:
                raise self.search_error("qdrant down", request=request)
            return httpx.Response(self.search_status, json={"result": self.points, "status": "ok"})

        if path.endswith("/points/count"):
            return httpx.Response(self.count_status, json=self.count_response)

        return httpx.Response(404, json={"status": {"error": "not found"}})

    def bodies(self, suffix):
        return [
            json.loads(r.content) for r in self.requests
            if r.url.path.endswith(suffix)
        ]


@pytest.fixture
def services():
    return FakeServices()


@pytest.fixture
def app_config():
    return AppConfig(
        embedding=EmbeddingConfig(),
        vector_index=VectorIndexConfig(),
        search=SearchConfig(),
        api=ApiConfig()
    )


@pytest.fixture
def hit():
    return make_hit
