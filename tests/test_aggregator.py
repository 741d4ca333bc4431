"""Tests for result deduplication and shaping."""

import pytest

from docsearch.aggregator import aggregate_hits, format_hit, status_message
from docsearch.config import SearchConfig
from docsearch.vector_store import SearchHit


@pytest.fixture
def config():
    return SearchConfig()


def to_hits(points):
    return [SearchHit.from_point(p) for p in points]


def test_duplicate_hrefs_keep_first_in_index_order(config, hit):
    hits = to_hits([
        hit("/a", 0.9, text="a first chunk"),
        hit("/b", 0.8),
        hit("/a", 0.7, text="a second chunk"),
        hit("/c", 0.6),
    ])

    outcome = aggregate_hits(hits, 5, config)

    assert [r.href for r in outcome.results] == ["/a", "/b", "/c"]
    assert outcome.results[0].score == 0.9
    assert outcome.results[0].description.startswith("a first chunk")


def test_results_capped_at_top_k(config, hit):
    hits = to_hits([hit(f"/doc-{i}", 1.0 - i / 10) for i in range(8)])

    outcome = aggregate_hits(hits, 3, config)

    assert len(outcome.results) == 3
    assert outcome.answer == "Found 3 relevant pages"


def test_order_is_not_resorted_by_score(config, hit):
    hits = to_hits([hit("/low", 0.2), hit("/high", 0.95)])

    outcome = aggregate_hits(hits, 5, config)

    assert [r.href for r in outcome.results] == ["/low", "/high"]


def test_description_truncated_to_150_chars_plus_ellipsis(config, hit):
    text = "x" * 400
    result = format_hit(SearchHit.from_point(hit("/long", text=text)), config)

    assert result.description == "x" * 150 + "..."


def test_short_text_still_gets_ellipsis(config, hit):
    result = format_hit(SearchHit.from_point(hit("/short", text="Install the agent.")), config)

    assert result.description == "Install the agent...."


def test_missing_text_and_title_defaults(config, hit):
    point = {"score": 0.5, "payload": {"href": "/bare"}}
    result = format_hit(SearchHit.from_point(point), config)

    assert result.title == "Untitled"
    assert result.description == "..."
    assert result.category is None


def test_empty_title_uses_default(config, hit):
    result = format_hit(SearchHit.from_point(hit("/x", title="")), config)
    assert result.title == "Untitled"


def test_category_and_score_pass_through(config, hit):
    result = format_hit(SearchHit.from_point(hit("/x", score=12.75, category="api")), config)

    assert result.category == "api"
    assert result.score == 12.75


def test_hits_without_href_collapse_to_one(config, hit):
    hits = to_hits([
        hit(None, 0.9, title="first orphan"),
        hit("/a", 0.8),
        hit(None, 0.7, title="second orphan"),
        hit("", 0.6, title="empty href"),
    ])

    outcome = aggregate_hits(hits, 5, config)

    assert [r.href for r in outcome.results] == ["", "/a"]
    assert outcome.results[0].title == "first orphan"


def test_formatting_is_deterministic(config, hit):
    h = SearchHit.from_point(hit("/same", text="y" * 200))
    assert format_hit(h, config) == format_hit(h, config)


def test_no_hits_means_no_answer(config):
    outcome = aggregate_hits([], 5, config)

    assert outcome.results == []
    assert outcome.answer is None


def test_status_message():
    assert status_message(0) is None
    assert status_message(1) == "Found 1 relevant pages"
    assert status_message(4) == "Found 4 relevant pages"


def test_custom_description_width(hit):
    config = SearchConfig(description_chars=10, description_suffix=" …")
    result = format_hit(SearchHit.from_point(hit("/x", text="abcdefghijklmnop")), config)

    assert result.description == "abcdefghij …"
