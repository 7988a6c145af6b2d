from bookcircle.client.api import ApiError
from bookcircle.client.cache import PageKey, ReviewCache


async def get_reviews(
    cache: ReviewCache,
    book_id: str,
    page: int = 1,
    limit: int = 5,
    sort: str = "desc",
) -> dict:
    try:
        return await cache.get_page(PageKey(book_id, page, limit, sort))
    except ApiError as e:
        return e.as_dict()


async def review_summary(cache: ReviewCache, book_id: str) -> dict:
    try:
        return await cache.client.rating_summary(book_id)
    except ApiError as e:
        return e.as_dict()


async def post_review(cache: ReviewCache, book_id: str, text: str, rating: int) -> dict:
    try:
        return await cache.create_review(PageKey(book_id), text, rating)
    except ApiError as e:
        return e.as_dict()


async def edit_review(
    cache: ReviewCache,
    book_id: str,
    review_id: int,
    text: str | None = None,
    rating: int | None = None,
    page: int = 1,
) -> dict:
    try:
        return await cache.update_review(PageKey(book_id, page), review_id, text=text, rating=rating)
    except ApiError as e:
        return e.as_dict()


async def remove_review(cache: ReviewCache, book_id: str, review_id: int, page: int = 1) -> dict:
    try:
        return await cache.delete_review(PageKey(book_id, page), review_id)
    except ApiError as e:
        return e.as_dict()


async def toggle_like(cache: ReviewCache, book_id: str, review_id: int, page: int = 1) -> dict:
    key = PageKey(book_id, page)
    try:
        liked = await cache.toggle_like(key, review_id)
    except ApiError as e:
        return e.as_dict()
    except LookupError as e:
        return {"error": True, "status": 404, "detail": str(e)}
    return {"reviewId": review_id, "liked": liked}
