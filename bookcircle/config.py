import os
from pathlib import Path

DB_PATH = os.environ.get("BOOKCIRCLE_DB_PATH", str(Path.cwd() / "bookcircle.db"))
DATABASE_URL = f"sqlite+aiosqlite:///{DB_PATH}"

# Bearer token settings
JWT_SECRET = os.environ.get("BOOKCIRCLE_JWT_SECRET", "bookcircle-dev-secret-change-me")
JWT_ALGORITHM = "HS256"
TOKEN_TTL_MINUTES = int(os.environ.get("BOOKCIRCLE_TOKEN_TTL_MINUTES", "60"))

# Review paging
DEFAULT_PAGE_SIZE = int(os.environ.get("BOOKCIRCLE_DEFAULT_PAGE_SIZE", "5"))
MAX_PAGE_SIZE = int(os.environ.get("BOOKCIRCLE_MAX_PAGE_SIZE", "50"))

# Client settings
API_URL = os.environ.get("BOOKCIRCLE_API_URL", "http://localhost:8000")

# Google Books API settings
GOOGLE_BOOKS_BASE_URL = os.environ.get("BOOKCIRCLE_GB_BASE_URL", "https://www.googleapis.com/books/v1")
GOOGLE_BOOKS_API_KEY = os.environ.get("BOOKCIRCLE_GB_API_KEY")
GOOGLE_BOOKS_TIMEOUT = float(os.environ.get("BOOKCIRCLE_GB_TIMEOUT", "10.0"))

# MCP runner credentials
MCP_EMAIL = os.environ.get("BOOKCIRCLE_MCP_EMAIL")
MCP_PASSWORD = os.environ.get("BOOKCIRCLE_MCP_PASSWORD")
