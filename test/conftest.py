"""
Test Configuration and Fixtures

This module provides:
- A throwaway SQLite database (aiosqlite) per pytest worker
- Table reset between integration tests
- The session-scoped TestClient and user/admin fixtures

Architecture:
- Unit tests (test/**/unit/): Override fixtures with mocks in their own conftest.py
- Integration tests: Use the real SQLAlchemy unit of work with proper cleanup
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time, so DATABASE_URL must be in place first
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_path = Path(tempfile.gettempdir()) / f'event_booking_test_{worker_id}_{os.getpid()}.db'
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_path}'
    os.environ['TEST_DB_PATH'] = str(db_path)

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('DEBUG', 'false')
    os.environ.setdefault('SERVICE_NAME', 'event-booking-test')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import delete  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from test.shared.utils import create_user  # noqa: E402
from test.util_constant import (  # noqa: E402
    ANOTHER_USER_EMAIL,
    ANOTHER_USER_NAME,
    DEFAULT_PASSWORD,
    TEST_ADMIN_EMAIL,
    TEST_ADMIN_NAME,
    TEST_USER_EMAIL,
    TEST_USER_NAME,
)


# =============================================================================
# Pytest Hooks: Detect test type and setup accordingly
# =============================================================================
def _is_unit_test_only_run(config: pytest.Config) -> bool:
    markexpr = config.getoption('markexpr', default='')
    if markexpr and 'unit' in str(markexpr) and 'not unit' not in str(markexpr):
        return True

    args = config.args or []
    test_paths = [arg for arg in args if arg and not arg.startswith('-')]
    return bool(test_paths and all('/unit/' in path or '\\unit\\' in path for path in test_paths))


def pytest_sessionstart(session: pytest.Session) -> None:
    if _is_unit_test_only_run(session.config):
        return
    asyncio.run(_setup_test_database())


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    db_path = Path(os.environ['TEST_DB_PATH'])
    for suffix in ('', '-wal', '-shm', '-journal'):
        Path(f'{db_path}{suffix}').unlink(missing_ok=True)


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            # First, so rows created by user fixtures survive the wipe
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
def _test_database_url() -> str:
    return os.environ['DATABASE_URL']


async def _setup_test_database() -> None:
    from src.platform.database.orm_db_setting import Base
    import src.service.event_booking.driven_adapter.model  # noqa: F401

    engine = create_async_engine(_test_database_url())
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def _clean_all_tables() -> None:
    from src.platform.database.orm_db_setting import Base

    engine = create_async_engine(_test_database_url())
    try:
        async with engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                await conn.execute(delete(table))
    finally:
        await engine.dispose()


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    await _clean_all_tables()
    yield

    from src.platform.database.orm_db_setting import _engine_manager

    # Engines are bound to the loop that created them; drop the one this test used
    current_loop = asyncio.get_running_loop()
    if _engine_manager._loop is current_loop:
        await _engine_manager.dispose()


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[Any, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clear_client_cookies(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    # Skip for unit tests - they don't use the HTTP client
    if 'unit' in [m.name for m in request.node.iter_markers()]:
        yield
        return
    # Lazily get client to avoid creating it for unit tests
    client = request.getfixturevalue('client')
    client.cookies.clear()
    yield
    client.cookies.clear()


@pytest.fixture
def admin_user(client: Any) -> dict[str, Any]:
    return create_user(client, TEST_ADMIN_EMAIL, DEFAULT_PASSWORD, TEST_ADMIN_NAME, 'admin')


@pytest.fixture
def normal_user(client: Any) -> dict[str, Any]:
    return create_user(client, TEST_USER_EMAIL, DEFAULT_PASSWORD, TEST_USER_NAME, 'user')


@pytest.fixture
def another_user(client: Any) -> dict[str, Any]:
    return create_user(client, ANOTHER_USER_EMAIL, DEFAULT_PASSWORD, ANOTHER_USER_NAME, 'user')
