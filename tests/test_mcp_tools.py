"""Tests for MCP tools. Each test gets a ReviewCache over a BookCircleClient
backed by the test httpx client fixture, seeds data via the API, then calls
the tool function directly."""

from unittest.mock import AsyncMock, patch

import pytest

from bookcircle.client.api import BookCircleClient
from bookcircle.client.books import BookMetadata
from bookcircle.client.cache import ReviewCache
from bookcircle.mcp.tools.profile import user_stats
from bookcircle.mcp.tools.reading import get_book, get_library, search_catalog, set_reading_status
from bookcircle.mcp.tools.reviews import (
    edit_review,
    get_reviews,
    post_review,
    remove_review,
    review_summary,
    toggle_like,
)


@pytest.fixture
async def cache(client):
    bc = BookCircleClient(client)
    await bc.register("reader@example.com", "pw123456")
    await bc.login("reader@example.com", "pw123456")
    return ReviewCache(bc)


@pytest.fixture
def anon_cache(client):
    return ReviewCache(BookCircleClient(client))


# --- reviews ---

@pytest.mark.asyncio
async def test_post_and_get_reviews(cache):
    posted = await post_review(cache, book_id="b1", text="Great book!", rating=5)
    assert posted["text"] == "Great book!"

    page = await get_reviews(cache, book_id="b1")
    assert [r["id"] for r in page["reviews"]] == [posted["id"]]


@pytest.mark.asyncio
async def test_post_review_validation_error(cache):
    result = await post_review(cache, book_id="b1", text="bad", rating=9)
    assert result["error"] is True
    assert result["status"] == 400
    assert {e["field"] for e in result["detail"]} == {"text", "rating"}


@pytest.mark.asyncio
async def test_post_review_anonymous(anon_cache):
    result = await post_review(anon_cache, book_id="b1", text="Great book!", rating=5)
    assert result["status"] == 401


@pytest.mark.asyncio
async def test_get_reviews_bad_sort(cache):
    result = await get_reviews(cache, book_id="b1", sort="random")
    assert result["error"] is True
    assert result["status"] == 400


@pytest.mark.asyncio
async def test_review_summary(cache):
    await post_review(cache, book_id="b1", text="Great book!", rating=5)
    await post_review(cache, book_id="b1", text="Pretty good", rating=4)
    result = await review_summary(cache, book_id="b1")
    assert result["total"] == 2
    assert result["average"] == 4.5


@pytest.mark.asyncio
async def test_edit_review(cache):
    posted = await post_review(cache, book_id="b1", text="Great book!", rating=5)
    result = await edit_review(cache, book_id="b1", review_id=posted["id"], rating=3)
    assert result["rating"] == 3
    assert result["text"] == "Great book!"


@pytest.mark.asyncio
async def test_remove_review(cache):
    posted = await post_review(cache, book_id="b1", text="Great book!", rating=5)
    result = await remove_review(cache, book_id="b1", review_id=posted["id"])
    assert result == {"message": "Review deleted"}
    page = await get_reviews(cache, book_id="b1")
    assert page["reviews"] == []


@pytest.mark.asyncio
async def test_remove_review_not_found(cache):
    result = await remove_review(cache, book_id="b1", review_id=999)
    assert result["status"] == 404


@pytest.mark.asyncio
async def test_toggle_like(cache):
    posted = await post_review(cache, book_id="b1", text="Great book!", rating=5)

    result = await toggle_like(cache, book_id="b1", review_id=posted["id"])
    assert result == {"reviewId": posted["id"], "liked": True}
    page = await get_reviews(cache, book_id="b1")
    assert page["reviews"][0]["likesCount"] == 1

    result = await toggle_like(cache, book_id="b1", review_id=posted["id"])
    assert result["liked"] is False


@pytest.mark.asyncio
async def test_toggle_like_review_not_on_page(cache):
    result = await toggle_like(cache, book_id="b1", review_id=12345)
    assert result["error"] is True
    assert result["status"] == 404


# --- reading ---

@pytest.mark.asyncio
async def test_set_reading_status_and_library(cache):
    result = await set_reading_status(cache.client, book_id="b1", status="reading", pages_read=50)
    assert result["status"] == "reading"

    library = await get_library(cache.client)
    assert [s["bookId"] for s in library] == ["b1"]


@pytest.mark.asyncio
async def test_set_reading_status_invalid(cache):
    result = await set_reading_status(cache.client, book_id="b1", status="abandoned")
    assert result["status"] == 400


@pytest.mark.asyncio
async def test_get_library_anonymous(anon_cache):
    result = await get_library(anon_cache.client)
    assert result["status"] == 401


@pytest.mark.asyncio
async def test_get_book_with_progress(cache):
    await set_reading_status(cache.client, book_id="vol1", status="reading", pages_read=50)
    metadata = BookMetadata(volume_id="vol1", title="Dune", authors=["Frank Herbert"], page_count=200)

    with patch("bookcircle.mcp.tools.reading.fetch_book", AsyncMock(return_value=metadata)):
        result = await get_book(cache.client, book_id="vol1")

    assert result["title"] == "Dune"
    assert result["reading_status"]["pagesRead"] == 50
    assert result["progress_percent"] == 25


@pytest.mark.asyncio
async def test_get_book_unknown_volume(anon_cache):
    with patch("bookcircle.mcp.tools.reading.fetch_book", AsyncMock(return_value=None)):
        result = await get_book(anon_cache.client, book_id="nope")
    assert result == {"volume_id": "nope", "reading_status": None}


@pytest.mark.asyncio
async def test_search_catalog():
    results = [
        BookMetadata(volume_id="vol1", title="Dune", authors=["Frank Herbert"]),
        BookMetadata(volume_id="vol2", title="Dune Messiah", authors=["Frank Herbert"]),
    ]
    search = AsyncMock(return_value=results)
    with patch("bookcircle.mcp.tools.reading.search_books", search):
        result = await search_catalog("dune", limit=2)

    search.assert_awaited_once_with("dune", limit=2)
    assert [b["volume_id"] for b in result] == ["vol1", "vol2"]
    assert result[0]["title"] == "Dune"


@pytest.mark.asyncio
async def test_search_catalog_no_results():
    with patch("bookcircle.mcp.tools.reading.search_books", AsyncMock(return_value=[])):
        assert await search_catalog("zzzz") == []


# --- profile ---

@pytest.mark.asyncio
async def test_user_stats_defaults_to_self(cache):
    await post_review(cache, book_id="b1", text="Great book!", rating=4)
    result = await user_stats(cache.client)
    assert result == {"totalReviews": 1, "avgRating": 4.0, "totalLikes": 0}


@pytest.mark.asyncio
async def test_user_stats_anonymous_needs_id(anon_cache):
    result = await user_stats(anon_cache.client)
    assert result["status"] == 400
