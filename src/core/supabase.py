"""Supabase client singleton for database operations."""

from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache
from typing import Any

import httpx
from postgrest.exceptions import APIError as PostgrestAPIError
from starlette.concurrency import run_in_threadpool
from supabase import Client, create_client

from src.api.middleware.error_handler import PersistenceError, PersistenceErrorKind
from src.core.config import get_settings


@lru_cache
def get_supabase_client() -> Client:
    """Get cached Supabase client singleton for database operations.

    Uses the secret key, which bypasses RLS at the PostgREST level. Only
    use it for server-side operations where authorization has already
    been verified.

    Returns:
        Client: Supabase client instance.
    """
    settings = get_settings()
    return create_client(
        settings.supabase_url,
        settings.supabase_secret_key,
    )


async def check_database_connection() -> dict[str, Any]:
    """Check if database connection is healthy.

    Returns:
        dict: Connection status with 'healthy' boolean and optional 'error' message.
    """
    try:
        client = get_supabase_client()
        query = client.table("companies").select("id").limit(1)
        await run_in_threadpool(query.execute)
        return {"healthy": True}
    except Exception as e:
        return {"healthy": False, "error": str(e)}


@contextmanager
def store_errors(action: str, kind: PersistenceErrorKind) -> Iterator[None]:
    """Translate driver failures raised inside the block into PersistenceError.

    Transport failures become ``connection_failed`` regardless of ``kind``;
    errors reported by PostgREST keep their SQLSTATE in ``code``.

    Args:
        action: What was being attempted, used in the error message.
        kind: Failure class for errors the store itself reports.
    """
    try:
        yield
    except httpx.TransportError as e:
        raise PersistenceError(
            f"Database unreachable while trying to {action}",
            PersistenceErrorKind.CONNECTION_FAILED,
        ) from e
    except PostgrestAPIError as e:
        raise PersistenceError(
            f"Failed to {action}: {e.message}",
            kind,
            code=e.code,
        ) from e
