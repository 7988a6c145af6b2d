import asyncio
import logging
import subprocess
import sys
from pathlib import Path

from httpx import ASGITransport, AsyncClient

from bookcircle.app import create_app
from bookcircle.client.api import ApiError, BookCircleClient
from bookcircle.client.cache import ReviewCache
from bookcircle.config import DB_PATH, MCP_EMAIL, MCP_PASSWORD
from bookcircle.database import engine
from bookcircle.mcp.server import create_mcp_server

logger = logging.getLogger(__name__)


def run_migrations():
    """Run Alembic migrations before starting the MCP server."""
    Path(DB_PATH).parent.mkdir(parents=True, exist_ok=True)

    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        capture_output=False,
    )
    if result.returncode != 0:
        sys.exit(1)


async def sign_in(client: BookCircleClient) -> None:
    """Log in with the configured account, registering it on first use."""
    if not (MCP_EMAIL and MCP_PASSWORD):
        logger.info("No MCP credentials configured; tools run anonymously")
        return
    try:
        await client.login(MCP_EMAIL, MCP_PASSWORD)
    except ApiError as e:
        if e.status != 401:
            raise
        await client.register(MCP_EMAIL, MCP_PASSWORD)
        await client.login(MCP_EMAIL, MCP_PASSWORD)
    finally:
        # Pooled connections belong to this event loop; the MCP server runs its own.
        await engine.dispose()


def main():
    run_migrations()

    app = create_app()
    transport = ASGITransport(app=app)
    http = AsyncClient(transport=transport, base_url="http://localhost")
    client = BookCircleClient(http)
    asyncio.run(sign_in(client))
    mcp = create_mcp_server(ReviewCache(client))
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
