"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from contextlib import ExitStack
from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ.setdefault("SUPABASE_SIGNING_KEY_JWK", "test-signing-key-jwk")
os.environ.setdefault("RESEND_API_KEY", "re_test_key")

COMPANY_ID = "770e8400-e29b-41d4-a716-446655440000"
OWNER_ID = "550e8400-e29b-41d4-a716-446655440000"

# Every module that binds get_supabase_client at import time
SUPABASE_CLIENT_TARGETS = (
    "src.core.supabase.get_supabase_client",
    "src.services.company_service.get_supabase_client",
    "src.services.project_service.get_supabase_client",
    "src.services.user_service.get_supabase_client",
)


@pytest.fixture(scope="session")
def test_settings() -> Generator[Any, None, None]:
    """Provide test settings with cleared cache.

    Yields:
        Settings: Test configuration settings.
    """
    from src.core.config import get_settings

    get_settings.cache_clear()

    settings = get_settings()
    yield settings

    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_task_runner() -> Generator[None, None, None]:
    """Give every test a fresh background task runner."""
    import src.core.background as background

    background._task_runner = None
    yield
    background._task_runner = None


@pytest.fixture
def company_row() -> dict[str, Any]:
    """A stored company row as returned by the database."""
    from src.services.company_defaults import build_default_company

    defaults = build_default_company(datetime(2026, 10, 14, 9, 30, tzinfo=timezone.utc))
    return {
        "id": COMPANY_ID,
        "name": "Acme",
        "owner_id": OWNER_ID,
        **defaults.model_dump(mode="json"),
        "created_at": "2026-10-14T09:30:00Z",
        "updated_at": "2026-10-14T09:30:00Z",
    }


@pytest.fixture
def mock_supabase_client() -> Generator[MagicMock, None, None]:
    """Provide one mocked Supabase client shared by every service.

    Yields:
        MagicMock: Mocked Supabase client for testing.
    """
    mock_client = MagicMock()

    mock_response = MagicMock()
    mock_response.data = []
    mock_client.table.return_value.select.return_value.limit.return_value.execute.return_value = (
        mock_response
    )

    with ExitStack() as stack:
        for target in SUPABASE_CLIENT_TARGETS:
            stack.enter_context(patch(target, return_value=mock_client))
        yield mock_client


@pytest.fixture
def client(mock_supabase_client: MagicMock) -> Generator[TestClient, None, None]:
    """Provide a test client for the FastAPI application.

    Args:
        mock_supabase_client: Mocked Supabase client fixture.

    Yields:
        TestClient: FastAPI test client.
    """
    from src.main import app

    with TestClient(app) as test_client:
        yield test_client
