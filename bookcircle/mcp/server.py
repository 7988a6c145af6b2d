from fastmcp import FastMCP

from bookcircle.client.cache import ReviewCache
from bookcircle.mcp.tools.profile import user_stats as _user_stats
from bookcircle.mcp.tools.reading import (
    get_book as _get_book,
    get_library as _get_library,
    search_catalog as _search_catalog,
    set_reading_status as _set_reading_status,
)
from bookcircle.mcp.tools.reviews import (
    edit_review as _edit_review,
    get_reviews as _get_reviews,
    post_review as _post_review,
    remove_review as _remove_review,
    review_summary as _review_summary,
    toggle_like as _toggle_like,
)


def create_mcp_server(cache: ReviewCache) -> FastMCP:
    client = cache.client
    mcp = FastMCP(
        name="bookcircle",
        instructions=(
            "Bookcircle is a book review community. Use these tools to read and "
            "write reviews, like other readers' reviews, and track reading status. "
            "Books are identified by their Google Books volume id."
        ),
    )

    @mcp.tool()
    async def get_reviews(book_id: str, page: int = 1, limit: int = 5, sort: str = "desc") -> dict:
        """Get a page of reviews for a book with like counts. sort is 'desc'
        (newest first) or 'asc'."""
        return await _get_reviews(cache, book_id=book_id, page=page, limit=limit, sort=sort)

    @mcp.tool()
    async def review_summary(book_id: str) -> dict:
        """Average rating and rating distribution for a book."""
        return await _review_summary(cache, book_id=book_id)

    @mcp.tool()
    async def post_review(book_id: str, text: str, rating: int) -> dict:
        """Write a review of a book. Text must be at least 5 characters, rating 1-5."""
        return await _post_review(cache, book_id=book_id, text=text, rating=rating)

    @mcp.tool()
    async def edit_review(
        book_id: str,
        review_id: int,
        text: str | None = None,
        rating: int | None = None,
    ) -> dict:
        """Change the text and/or rating of one of your own reviews."""
        return await _edit_review(cache, book_id=book_id, review_id=review_id, text=text, rating=rating)

    @mcp.tool()
    async def remove_review(book_id: str, review_id: int) -> dict:
        """Delete one of your own reviews."""
        return await _remove_review(cache, book_id=book_id, review_id=review_id)

    @mcp.tool()
    async def toggle_like(book_id: str, review_id: int, page: int = 1) -> dict:
        """Like a review, or remove your like if you already liked it."""
        return await _toggle_like(cache, book_id=book_id, review_id=review_id, page=page)

    @mcp.tool()
    async def set_reading_status(
        book_id: str,
        status: str,
        format: str | None = None,
        pages_read: int | None = None,
    ) -> dict:
        """Set your reading status for a book: 'want_to_read', 'reading' or
        'finished'. Optionally record the format and pages read."""
        return await _set_reading_status(
            client, book_id=book_id, status=status, format=format, pages_read=pages_read
        )

    @mcp.tool()
    async def get_library() -> list[dict] | dict:
        """List every book you have a reading status for, most recently updated first."""
        return await _get_library(client)

    @mcp.tool()
    async def get_book(book_id: str) -> dict:
        """Look up a book in the catalog, with your reading status and progress."""
        return await _get_book(client, book_id=book_id)

    @mcp.tool()
    async def search_books(query: str, limit: int = 10) -> list[dict]:
        """Search the Google Books catalog by title, author or ISBN."""
        return await _search_catalog(query, limit=limit)

    @mcp.tool()
    async def user_stats(user_id: int | None = None) -> dict:
        """Review count, average rating and likes received for a user (default: you)."""
        return await _user_stats(client, user_id=user_id)

    return mcp
