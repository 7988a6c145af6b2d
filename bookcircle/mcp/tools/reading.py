from dataclasses import asdict

from bookcircle.client.api import ApiError, BookCircleClient
from bookcircle.client.books import fetch_book, reading_progress, search_books


async def set_reading_status(
    client: BookCircleClient,
    book_id: str,
    status: str,
    format: str | None = None,
    pages_read: int | None = None,
) -> dict:
    try:
        return await client.set_reading_status(book_id, status, format=format, pages_read=pages_read)
    except ApiError as e:
        return e.as_dict()


async def get_library(client: BookCircleClient) -> list[dict] | dict:
    try:
        return await client.reading_statuses()
    except ApiError as e:
        return e.as_dict()


async def get_book(client: BookCircleClient, book_id: str) -> dict:
    """Catalog metadata plus the caller's reading status and progress."""
    metadata = await fetch_book(book_id)
    result = asdict(metadata) if metadata else {"volume_id": book_id}

    status = None
    if client.credentials is not None:
        try:
            status = await client.reading_status(book_id)
        except ApiError as e:
            return e.as_dict()
    result["reading_status"] = status
    if status and metadata:
        result["progress_percent"] = reading_progress(status.get("pagesRead", 0), metadata.page_count)
    return result


async def search_catalog(query: str, limit: int = 10) -> list[dict]:
    return [asdict(book) for book in await search_books(query, limit=limit)]
