"""Optimistic client-side cache of review pages.

Mutations patch the cached page before the request is sent. A failed request
restores the snapshot taken just before patching. Either way the book's pages
are marked stale afterwards, so the next read goes back to the server.
Mutations touching the same page are serialized per key.
"""

import asyncio
import copy
import logging
import math
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from bookcircle.client.api import BookCircleClient
from bookcircle.config import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageKey:
    book_id: str
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    sort: str = "desc"


@dataclass
class _Entry:
    data: dict
    stale: bool = False


def _find_review(page: dict, review_id: int) -> dict | None:
    for review in page["reviews"]:
        if review["id"] == review_id:
            return review
    return None


def _set_total(page: dict, total: int) -> None:
    pagination = page["pagination"]
    pagination["total"] = max(0, total)
    pagination["totalPages"] = max(1, math.ceil(pagination["total"] / pagination["limit"]))


class ReviewCache:
    """Pages are kept least-recently-used first and trimmed to ``max_pages``.

    Callers always get a copy of the cached page, never the page itself.
    """

    def __init__(self, client: BookCircleClient, max_pages: int = 256) -> None:
        self.client = client
        self.max_pages = max_pages
        self._entries: OrderedDict[PageKey, _Entry] = OrderedDict()
        self._locks: dict[PageKey, asyncio.Lock] = {}

    def _lock(self, key: PageKey) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    def _store(self, key: PageKey, entry: _Entry) -> _Entry:
        self._entries[key] = entry
        self._entries.move_to_end(key)
        self._evict()
        return entry

    def _evict(self) -> None:
        for key in list(self._entries):
            if len(self._entries) <= self.max_pages:
                return
            lock = self._locks.get(key)
            if lock is not None and lock.locked():
                continue
            del self._entries[key]
            self._locks.pop(key, None)
            logger.debug("Evicted cached page %s", key)

    def __len__(self) -> int:
        return len(self._entries)

    def peek(self, key: PageKey) -> dict | None:
        """Cached data for ``key``, stale or not, without touching the network."""
        entry = self._entries.get(key)
        return copy.deepcopy(entry.data) if entry else None

    def is_stale(self, key: PageKey) -> bool:
        entry = self._entries.get(key)
        return entry is None or entry.stale

    def invalidate(self, book_id: str) -> None:
        for key, entry in self._entries.items():
            if key.book_id == book_id:
                entry.stale = True

    async def get_page(self, key: PageKey) -> dict:
        entry = self._entries.get(key)
        if entry is not None and not entry.stale:
            self._entries.move_to_end(key)
            return copy.deepcopy(entry.data)
        async with self._lock(key):
            # Another task may have refreshed it while we waited.
            entry = self._entries.get(key)
            if entry is None or entry.stale:
                data = await self.client.get_reviews(key.book_id, page=key.page, limit=key.limit, sort=key.sort)
                entry = self._store(key, _Entry(data=data))
            return copy.deepcopy(entry.data)

    async def _mutate(self, key: PageKey, patch: Callable[[dict], None], send: Callable[[], Awaitable]):
        async with self._lock(key):
            entry = self._entries.get(key)
            snapshot = copy.deepcopy(entry.data) if entry else None
            if entry is not None:
                patch(entry.data)
            try:
                return await send()
            except BaseException:
                # Cancellation must roll back too.
                if snapshot is not None:
                    logger.warning("Rolling back optimistic update on %s", key)
                    self._store(key, _Entry(data=snapshot, stale=entry.stale))
                raise
            finally:
                self.invalidate(key.book_id)

    async def toggle_like(self, key: PageKey, review_id: int) -> bool:
        """Like or unlike depending on the cached state. Returns the new liked state."""
        await self.get_page(key)
        state = {}

        def patch(page: dict) -> None:
            review = _find_review(page, review_id)
            if review is None:
                raise LookupError(f"Review {review_id} is not on page {key.page} of book {key.book_id}")
            state["liked"] = review["isLikedByUser"]
            review["isLikedByUser"] = not state["liked"]
            review["likesCount"] += -1 if state["liked"] else 1

        async def send():
            if "liked" not in state:
                # The page was evicted between the read and the patch.
                raise LookupError(f"Review {review_id} is not cached for book {key.book_id}")
            if state["liked"]:
                await self.client.unlike_review(review_id)
            else:
                await self.client.like_review(review_id)

        await self._mutate(key, patch, send)
        return not state["liked"]

    async def create_review(self, key: PageKey, text: str, rating: int) -> dict:
        def patch(page: dict) -> None:
            if key.page == 1 and key.sort == "desc":
                now = datetime.now(UTC).isoformat()
                page["reviews"].insert(0, {
                    "id": None,
                    "bookId": key.book_id,
                    "authorId": self.client.user_id,
                    "text": text,
                    "rating": rating,
                    "createdAt": now,
                    "updatedAt": now,
                    "likesCount": 0,
                    "isLikedByUser": False,
                })
                del page["reviews"][key.limit:]
            _set_total(page, page["pagination"]["total"] + 1)

        return await self._mutate(key, patch, lambda: self.client.create_review(key.book_id, text, rating))

    async def update_review(
        self, key: PageKey, review_id: int, text: str | None = None, rating: int | None = None
    ) -> dict:
        def patch(page: dict) -> None:
            review = _find_review(page, review_id)
            if review is None:
                return
            if text is not None:
                review["text"] = text
            if rating is not None:
                review["rating"] = rating

        return await self._mutate(
            key, patch, lambda: self.client.update_review(review_id, text=text, rating=rating)
        )

    async def delete_review(self, key: PageKey, review_id: int) -> dict:
        def patch(page: dict) -> None:
            before = len(page["reviews"])
            page["reviews"] = [r for r in page["reviews"] if r["id"] != review_id]
            if len(page["reviews"]) < before:
                _set_total(page, page["pagination"]["total"] - 1)

        return await self._mutate(key, patch, lambda: self.client.delete_review(review_id))
