"""Tests for domain models."""

import pytest

from notion_archive.models import EntityKind, SearchQuery, SearchResultPage


def test_search_query_is_frozen() -> None:
    query = SearchQuery(EntityKind.PAGE)
    with pytest.raises(AttributeError):
        query.cursor = "abc"  # type: ignore[misc]


def test_search_query_without_cursor_omits_start_cursor() -> None:
    body = SearchQuery(EntityKind.DATABASE).to_body()

    assert body == {"filter": {"value": "database", "property": "object"}, "page_size": 100}


def test_with_cursor_keeps_everything_else() -> None:
    query = SearchQuery(EntityKind.PAGE, page_size=10)

    next_query = query.with_cursor("X")

    assert next_query == SearchQuery(EntityKind.PAGE, cursor="X", page_size=10)
    assert next_query.to_body()["start_cursor"] == "X"
    assert query.cursor is None


def test_result_page_requires_cursor_when_more_results() -> None:
    with pytest.raises(ValueError, match="no next cursor"):
        SearchResultPage(results=(), has_more=True, next_cursor="")


def test_result_page_from_response() -> None:
    page = SearchResultPage.from_response(
        {"object": "list", "results": [{"id": "a"}], "has_more": True, "next_cursor": "c1"}
    )

    assert page.results == ({"id": "a"},)
    assert page.has_more is True
    assert page.next_cursor == "c1"


def test_result_page_from_last_response() -> None:
    page = SearchResultPage.from_response({"results": [], "has_more": False, "next_cursor": None})

    assert page.has_more is False
    assert page.results == ()
