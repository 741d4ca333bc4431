"""Deduplication and shaping of raw vector hits into search results."""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .config import SearchConfig
from .vector_store import SearchHit


@dataclass
class SearchResult:
    """User-facing search result, one per documentation page."""
    title: str
    description: str
    href: str
    category: Optional[str]
    score: float


@dataclass
class SearchOutcome:
    """Results plus the one-line status shown to the user."""
    results: List[SearchResult] = field(default_factory=list)
    answer: Optional[str] = None


def format_hit(hit: SearchHit, config: SearchConfig) -> SearchResult:
    """Build a SearchResult from a hit. The suffix is always appended."""
    return SearchResult(
        title=hit.title or config.default_title,
        description=hit.text[:config.description_chars] + config.description_suffix,
        href=hit.href,
        category=hit.category,
        score=hit.score
    )


def status_message(count: int) -> Optional[str]:
    """Count message for a non-empty result list, otherwise None."""
    if count > 0:
        return f"Found {count} relevant pages"
    return None


def aggregate_hits(
    hits: Iterable[SearchHit],
    top_k: int,
    config: SearchConfig
) -> SearchOutcome:
    """
    Collapse chunk-level hits into at most top_k page-level results.

    Hits are consumed in index order and the first hit for each href wins.
    A missing href counts as the key "", so only the first such hit is kept.
    Results are not re-sorted.

    Args:
        hits: Raw hits in relevance order
        top_k: Maximum number of results
        config: Search configuration

    Returns:
        SearchOutcome with the results and a count message
    """
    results: List[SearchResult] = []
    seen_hrefs = set()

    for hit in hits:
        if len(results) >= top_k:
            break

        href = hit.href
        if href in seen_hrefs:
            continue
        seen_hrefs.add(href)

        results.append(format_hit(hit, config))

    return SearchOutcome(results=results, answer=status_message(len(results)))
