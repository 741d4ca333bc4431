"""Qdrant vector index access layer."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging

import httpx

from .config import VectorIndexConfig


logger = logging.getLogger(__name__)


@dataclass
class SearchHit:
    """Raw vector search hit."""
    score: float
    payload: Dict[str, Any] = field(default_factory=dict)

    def _text_field(self, key: str) -> Optional[str]:
        value = self.payload.get(key)
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    @property
    def href(self) -> str:
        return self._text_field("href") or ""

    @property
    def title(self) -> Optional[str]:
        return self._text_field("title")

    @property
    def text(self) -> str:
        return self._text_field("text") or ""

    @property
    def category(self) -> Optional[str]:
        return self._text_field("category")

    @classmethod
    def from_point(cls, point: Dict[str, Any]) -> "SearchHit":
        """Build a hit from a Qdrant scored point; a missing score counts as 0.0."""
        score = point.get("score")
        payload = point.get("payload")
        return cls(
            score=float(score) if score is not None else 0.0,
            payload=payload if isinstance(payload, dict) else {}
        )


class VectorStore:
    """Qdrant REST client for one collection."""

    def __init__(
        self,
        config: VectorIndexConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize VectorStore.

        Args:
            config: Vector index configuration
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.config = config
        self.transport = transport

    def _collection_url(self, suffix: str) -> str:
        base = self.config.base_url.rstrip("/")
        return f"{base}/collections/{self.config.collection_name}/{suffix}"

    def _client(self) -> httpx.AsyncClient:
        headers = {}
        if self.config.api_key:
            headers["api-key"] = self.config.api_key
        return httpx.AsyncClient(
            timeout=self.config.timeout,
            transport=self.transport,
            headers=headers
        )

    async def search(self, vector: List[float], top_k: int) -> List[SearchHit]:
        """
        Query the collection for the nearest points.

        Asks for top_k * overfetch_factor points so that deduplication by
        href still leaves top_k documents. Order is the index's order.

        Args:
            vector: Query embedding
            top_k: Number of documents the caller wants

        Returns:
            List of SearchHit, empty on timeout or when the index has no result
        """
        limit = top_k * self.config.overfetch_factor
        body = {
            "vector": vector,
            "limit": limit,
            "with_payload": True
        }

        try:
            async with self._client() as client:
                response = await client.post(self._collection_url("points/search"), json=body)
        except httpx.TimeoutException as e:
            logger.warning(f"Vector search timed out after {self.config.timeout}s: {e}")
            return []

        if response.status_code >= 400:
            logger.warning(
                f"Vector search on '{self.config.collection_name}' "
                f"returned HTTP {response.status_code}"
            )

        data = response.json()
        points = data.get("result") if isinstance(data, dict) else None
        if not isinstance(points, list):
            return []

        hits = [SearchHit.from_point(point) for point in points if isinstance(point, dict)]
        logger.debug(f"Vector search returned {len(hits)} hits (limit={limit})")
        return hits

    async def count(self) -> Optional[int]:
        """
        Get the number of points in the collection.

        Returns:
            Exact point count, or None if the index is unreachable
        """
        try:
            async with self._client() as client:
                response = await client.post(
                    self._collection_url("points/count"),
                    json={"exact": True}
                )
            response.raise_for_status()
            return int(response.json()["result"]["count"])
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Failed to count points in '{self.config.collection_name}': {e}")
            return None
