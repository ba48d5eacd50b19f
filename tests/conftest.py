import os

os.environ.setdefault("CF_AUTH_PASSWORD", "test-password")
os.environ.setdefault("CF_JWT_SECRET", "test-secret-key-for-the-suite-0123456789")
os.environ.setdefault("CF_OPENAI_API_KEY", "")
os.environ.setdefault("CF_ANTHROPIC_API_KEY", "")

from collections.abc import AsyncGenerator  # noqa: E402

import aiosqlite  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from cashflow.auth import get_current_user_id  # noqa: E402
from cashflow.database import close_database, connect_database  # noqa: E402
from cashflow.dependencies import (  # noqa: E402
    get_db,
    get_llm,
    get_notification_sender,
    get_object_storage,
)
from cashflow.main import app  # noqa: E402
from cashflow.users.repository import UserRepository  # noqa: E402

from factories import RecordingSender, RecordingStorage, user_row  # noqa: E402

TEST_USER_ID = "user-1"


@pytest_asyncio.fixture(scope="function")
async def db() -> AsyncGenerator[aiosqlite.Connection, None]:
    """Fresh in-memory database with the schema applied."""
    conn = await connect_database(":memory:")
    yield conn
    await close_database(conn)


@pytest_asyncio.fixture(scope="function")
async def registered_user(db: aiosqlite.Connection) -> str:
    """A registered user with a starting balance of 1000."""
    repo = UserRepository(db)
    await repo.create(user_row(TEST_USER_ID, balance=1000.0))
    await repo.commit()
    return TEST_USER_ID


@pytest_asyncio.fixture(scope="function")
async def other_user(db: aiosqlite.Connection) -> str:
    repo = UserRepository(db)
    await repo.create(user_row("someone-else", balance=0.0))
    await repo.commit()
    return "someone-else"


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture
def llm():
    """Chat model handed to the app; None means fallbacks only."""
    return None


@pytest_asyncio.fixture(scope="function")
async def client(
    db: aiosqlite.Connection,
    sender: RecordingSender,
    storage: RecordingStorage,
    llm,
) -> AsyncGenerator[AsyncClient, None]:
    """Test client authenticated as TEST_USER_ID with overridden clients."""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_current_user_id] = lambda: TEST_USER_ID
    app.dependency_overrides[get_notification_sender] = lambda: sender
    app.dependency_overrides[get_llm] = lambda: llm
    app.dependency_overrides[get_object_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()

