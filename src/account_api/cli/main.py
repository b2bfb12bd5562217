"""account-api CLI — run the server, check the store.

Usage:
    account-api serve                 # Run the API with uvicorn
    account-api serve --port 9000     # Override host/port from settings
    account-api ping                  # Check MongoDB is reachable
"""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

import click

from account_api.config import get_settings


def _run(coro):
    """Run an async coroutine from a synchronous click handler."""
    return asyncio.run(coro)


@click.group()
def cli():
    """Account API management commands."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: ACCOUNT_HOST)")
@click.option("--port", default=None, type=int, help="Port (default: ACCOUNT_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "account_api.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@cli.command()
def ping():
    """Check that the user store is reachable."""
    from account_api.db.engine import create_client
    from account_api.services.user_store import MongoUserStore, StoreError

    settings = get_settings()

    async def _ping() -> Optional[str]:
        store = MongoUserStore(create_client(settings), settings.mongo_database)
        try:
            await store.ping()
        except StoreError as e:
            return str(e)
        finally:
            await store.close()
        return None

    error = _run(_ping())
    if error:
        click.secho(f"✗ {error}", fg="red", err=True)
        sys.exit(1)
    click.secho(f"✓ Connected (database: {settings.mongo_database})", fg="green")


if __name__ == "__main__":
    cli()
