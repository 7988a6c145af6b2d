from bookcircle.client.api import ApiError, BookCircleClient, Credentials
from bookcircle.client.cache import PageKey, ReviewCache

__all__ = ["ApiError", "BookCircleClient", "Credentials", "PageKey", "ReviewCache"]
