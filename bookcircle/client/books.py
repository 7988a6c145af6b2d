"""Google Books lookups used to render titles, covers and reading progress."""

import logging
from dataclasses import dataclass, field

import httpx

from bookcircle.config import GOOGLE_BOOKS_API_KEY, GOOGLE_BOOKS_BASE_URL, GOOGLE_BOOKS_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass
class BookMetadata:
    """Read-only view of a catalog volume."""

    volume_id: str
    title: str
    authors: list[str] = field(default_factory=list)
    cover_url: str | None = None
    page_count: int | None = None
    published_date: str | None = None
    description: str | None = None


def _params(**extra) -> dict:
    params = {k: v for k, v in extra.items() if v is not None}
    if GOOGLE_BOOKS_API_KEY:
        params["key"] = GOOGLE_BOOKS_API_KEY
    return params


def _parse_volume(data: dict) -> BookMetadata:
    info = data.get("volumeInfo") or {}
    images = info.get("imageLinks") or {}
    page_count = info.get("pageCount")
    return BookMetadata(
        volume_id=data["id"],
        title=info.get("title") or "Untitled",
        authors=list(info.get("authors") or []),
        cover_url=images.get("thumbnail") or images.get("smallThumbnail"),
        page_count=page_count if isinstance(page_count, int) and page_count > 0 else None,
        published_date=info.get("publishedDate"),
        description=info.get("description"),
    )


def reading_progress(pages_read: int, page_count: int | None) -> int | None:
    """Percent read, clamped to 0-100. None when the page count is unknown."""
    if not page_count:
        return None
    return max(0, min(100, round(pages_read * 100 / page_count)))


async def fetch_book(volume_id: str) -> BookMetadata | None:
    try:
        async with httpx.AsyncClient(timeout=GOOGLE_BOOKS_TIMEOUT) as client:
            resp = await client.get(f"{GOOGLE_BOOKS_BASE_URL}/volumes/{volume_id}", params=_params())
            if resp.status_code != 200:
                logger.warning("Google Books lookup failed: %s -> %d", volume_id, resp.status_code)
                return None
            return _parse_volume(resp.json())
    except httpx.HTTPError as e:
        logger.error("Google Books API error for %s: %s", volume_id, e)
        return None


async def search_books(query: str, limit: int = 10) -> list[BookMetadata]:
    try:
        async with httpx.AsyncClient(timeout=GOOGLE_BOOKS_TIMEOUT) as client:
            resp = await client.get(
                f"{GOOGLE_BOOKS_BASE_URL}/volumes",
                params=_params(q=query, maxResults=max(1, min(limit, 40))),
            )
            if resp.status_code != 200:
                logger.warning("Google Books search failed: %r -> %d", query, resp.status_code)
                return []
            return [_parse_volume(item) for item in resp.json().get("items") or [] if item.get("id")]
    except httpx.HTTPError as e:
        logger.error("Google Books search error for %r: %s", query, e)
        return []
