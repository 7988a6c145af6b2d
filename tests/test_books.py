"""Tests for the Google Books lookup."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from bookcircle.client.books import _parse_volume, fetch_book, reading_progress, search_books


VOLUME = {
    "id": "zyTCAlFPjgYC",
    "volumeInfo": {
        "title": "The Google Story",
        "authors": ["David A. Vise", "Mark Malseed"],
        "publishedDate": "2005-11-15",
        "pageCount": 207,
        "imageLinks": {"smallThumbnail": "http://x/small.jpg", "thumbnail": "http://x/thumb.jpg"},
    },
}


def _mock_response(status_code, json_data):
    resp = MagicMock(spec=httpx.Response)
    resp.status_code = status_code
    resp.json.return_value = json_data
    return resp


def _mock_client(**get_kwargs):
    mock_client = AsyncMock()
    mock_client.get = AsyncMock(**get_kwargs)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


def test_parse_volume():
    book = _parse_volume(VOLUME)
    assert book.volume_id == "zyTCAlFPjgYC"
    assert book.title == "The Google Story"
    assert book.authors == ["David A. Vise", "Mark Malseed"]
    assert book.cover_url == "http://x/thumb.jpg"
    assert book.page_count == 207


def test_parse_volume_sparse():
    book = _parse_volume({"id": "abc"})
    assert book.title == "Untitled"
    assert book.authors == []
    assert book.cover_url is None
    assert book.page_count is None


def test_parse_volume_ignores_zero_page_count():
    assert _parse_volume({"id": "abc", "volumeInfo": {"pageCount": 0}}).page_count is None


def test_reading_progress():
    assert reading_progress(50, 200) == 25
    assert reading_progress(0, 200) == 0
    assert reading_progress(250, 200) == 100


def test_reading_progress_unknown_page_count():
    assert reading_progress(50, None) is None
    assert reading_progress(50, 0) is None


@pytest.mark.asyncio
async def test_fetch_book_success():
    mock_client = _mock_client(return_value=_mock_response(200, VOLUME))
    with patch("bookcircle.client.books.httpx.AsyncClient", return_value=mock_client):
        result = await fetch_book("zyTCAlFPjgYC")

    assert result is not None
    assert result.title == "The Google Story"
    assert mock_client.get.call_args.args[0].endswith("/volumes/zyTCAlFPjgYC")


@pytest.mark.asyncio
async def test_fetch_book_not_found():
    mock_client = _mock_client(return_value=_mock_response(404, {}))
    with patch("bookcircle.client.books.httpx.AsyncClient", return_value=mock_client):
        result = await fetch_book("missing")
    assert result is None


@pytest.mark.asyncio
async def test_fetch_book_network_error():
    mock_client = _mock_client(side_effect=httpx.ConnectError("Connection refused"))
    with patch("bookcircle.client.books.httpx.AsyncClient", return_value=mock_client):
        result = await fetch_book("zyTCAlFPjgYC")
    assert result is None


@pytest.mark.asyncio
async def test_search_books():
    payload = {"items": [VOLUME, {"volumeInfo": {"title": "No id"}}]}
    mock_client = _mock_client(return_value=_mock_response(200, payload))
    with patch("bookcircle.client.books.httpx.AsyncClient", return_value=mock_client):
        results = await search_books("google", limit=5)

    assert [b.volume_id for b in results] == ["zyTCAlFPjgYC"]
    assert mock_client.get.call_args.kwargs["params"]["q"] == "google"
    assert mock_client.get.call_args.kwargs["params"]["maxResults"] == 5


@pytest.mark.asyncio
async def test_search_books_no_items():
    mock_client = _mock_client(return_value=_mock_response(200, {"totalItems": 0}))
    with patch("bookcircle.client.books.httpx.AsyncClient", return_value=mock_client):
        assert await search_books("nothing") == []
