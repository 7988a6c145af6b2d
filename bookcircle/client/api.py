from dataclasses import dataclass

from httpx import AsyncClient, Response


class ApiError(Exception):
    """A 4xx answer from the Bookcircle API."""

    def __init__(self, status: int, detail) -> None:
        super().__init__(f"{status}: {detail}")
        self.status = status
        self.detail = detail

    def as_dict(self) -> dict:
        return {"error": True, "status": self.status, "detail": self.detail}


@dataclass(frozen=True)
class Credentials:
    token: str
    user_id: int


class BookCircleClient:
    """Thin wrapper around httpx.AsyncClient for the Bookcircle REST API.

    Credentials are held by the client instance and sent explicitly with each
    authenticated request.
    """

    def __init__(self, http: AsyncClient, credentials: Credentials | None = None) -> None:
        self.http = http
        self.credentials = credentials

    @property
    def user_id(self) -> int | None:
        return self.credentials.user_id if self.credentials else None

    # --- auth ---

    async def register(self, email: str, password: str) -> dict:
        return await self._request("POST", "/auth/register", json={"email": email, "password": password})

    async def login(self, email: str, password: str) -> Credentials:
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.credentials = Credentials(token=data["token"], user_id=data["userId"])
        return self.credentials

    def logout(self) -> None:
        self.credentials = None

    # --- reviews ---

    async def get_reviews(self, book_id: str, page: int = 1, limit: int = 5, sort: str = "desc") -> dict:
        params = {"page": page, "limit": limit, "sort": sort}
        return await self._request("GET", f"/reviews/{book_id}", params=params, auth=self.credentials is not None)

    async def rating_summary(self, book_id: str) -> dict:
        return await self._request("GET", f"/reviews/{book_id}/summary")

    async def create_review(self, book_id: str, text: str, rating: int) -> dict:
        body = {"bookId": book_id, "text": text, "rating": rating}
        return await self._request("POST", "/reviews", json=body, auth=True)

    async def update_review(self, review_id: int, text: str | None = None, rating: int | None = None) -> dict:
        body = {}
        if text is not None:
            body["text"] = text
        if rating is not None:
            body["rating"] = rating
        return await self._request("PUT", f"/reviews/{review_id}", json=body, auth=True)

    async def delete_review(self, review_id: int) -> dict:
        return await self._request("DELETE", f"/reviews/{review_id}", auth=True)

    async def like_review(self, review_id: int) -> dict:
        return await self._request("POST", f"/reviews/{review_id}/like", auth=True)

    async def unlike_review(self, review_id: int) -> dict:
        return await self._request("DELETE", f"/reviews/{review_id}/like", auth=True)

    # --- reading status ---

    async def reading_statuses(self) -> list:
        return await self._request("GET", "/reading-status", auth=True)

    async def reading_status(self, book_id: str) -> dict | None:
        return await self._request("GET", f"/reading-status/{book_id}", auth=True)

    async def set_reading_status(
        self,
        book_id: str,
        status: str,
        format: str | None = None,
        pages_read: int | None = None,
    ) -> dict:
        body = {"bookId": book_id, "status": status}
        if format is not None:
            body["format"] = format
        if pages_read is not None:
            body["pagesRead"] = pages_read
        return await self._request("POST", "/reading-status", json=body, auth=True)

    # --- users ---

    async def user_stats(self, user_id: int) -> dict:
        return await self._request("GET", f"/users/{user_id}/stats")

    async def _request(self, method: str, path: str, auth: bool = False, **kwargs):
        headers = kwargs.pop("headers", {})
        if auth and self.credentials is not None:
            headers["Authorization"] = f"Bearer {self.credentials.token}"
        resp = await self.http.request(method, path, headers=headers, **kwargs)
        return self._handle(resp)

    def _handle(self, resp: Response):
        if resp.status_code == 204:
            return {"ok": True}
        if resp.status_code >= 500:
            raise RuntimeError(f"Server error {resp.status_code}: {resp.text}")
        if resp.status_code >= 400:
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            raise ApiError(resp.status_code, detail)
        return resp.json()
