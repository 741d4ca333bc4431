"""Semantic search pipeline: embed, search, aggregate."""

import logging
import time
from contextlib import contextmanager
from typing import Optional

from .aggregator import SearchOutcome, aggregate_hits
from .config import SearchConfig
from .embedder import Embedder
from .vector_store import VectorStore


logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "Search temporarily unavailable"
ERROR_MESSAGE = "Search error"


@contextmanager
def timer(label: str):
    """
    Context manager for timing code blocks.

    Args:
        label: Label for the timed block
    """
    start = time.perf_counter()
    yield
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.debug(f"[TIMER] {label}: {elapsed_ms:.1f}ms")


class Searcher:
    """Semantic search engine over the documentation index."""

    def __init__(
        self,
        embedder: Embedder,
        vector_store: VectorStore,
        search_config: SearchConfig
    ):
        """
        Initialize Searcher.

        Args:
            embedder: Embedder instance
            vector_store: VectorStore instance
            search_config: Result shaping configuration
        """
        self.embedder = embedder
        self.vector_store = vector_store
        self.search_config = search_config

    async def search(self, query: Optional[str], top_k: Optional[int] = None) -> SearchOutcome:
        """
        Search for documentation pages similar to the query.

        Queries shorter than min_query_chars return an empty outcome without
        calling either service. An embedding failure returns an empty outcome
        with UNAVAILABLE_MESSAGE. Unexpected exceptions from the vector index
        are left to the caller.

        Args:
            query: Raw user query
            top_k: Number of results to return (default from config)

        Returns:
            SearchOutcome with deduplicated results in index order
        """
        if top_k is None:
            top_k = self.search_config.default_top_k

        if not query or len(query) < self.search_config.min_query_chars:
            logger.debug(f"Query too short, skipping search: {query!r}")
            return SearchOutcome()

        logger.info(f"Search request: query='{query}', top_k={top_k}")

        with timer("query_embedding"):
            embedding = await self.embedder.embed_query(query)

        if not embedding.ok:
            logger.warning(f"Embedding failed ({embedding.error}), returning degraded response")
            return SearchOutcome(answer=UNAVAILABLE_MESSAGE)

        with timer("vector_search"):
            hits = await self.vector_store.search(embedding.vector, top_k)

        outcome = aggregate_hits(hits, top_k, self.search_config)
        logger.info(f"Search returned {len(outcome.results)} results from {len(hits)} hits")

        for i, result in enumerate(outcome.results, 1):
            logger.debug(f"  [{i}] score={result.score} href={result.href} title=\"{result.title}\"")

        return outcome
