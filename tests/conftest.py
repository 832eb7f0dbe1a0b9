"""
Shared fixtures: an on-disk SQLite database per test (created from the ORM
metadata), services bound to a real AsyncSession, and an HTTP client that
drives the FastAPI app in-process with the session dependency overridden.
"""

from collections.abc import AsyncIterator

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.api.deps import get_mailer
from app.db.session import get_session
from app.main import app
from app.models import Base
from app.repositories import LedgerRepository, RoomRepository, UserRepository
from app.services import ExpenseService, Mailer, RoomService, UserService


class RecordingMailer(Mailer):
    """Keeps verification tokens instead of sending them."""

    def __init__(self):
        super().__init__(host="")
        self.sent: list[tuple[str, str, str]] = []

    async def send_verification(self, email: str, username: str, token: str) -> None:
        self.sent.append((email, username, token))


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def room_service(session) -> RoomService:
    return RoomService(session, RoomRepository(session), LedgerRepository(session))


@pytest.fixture
def expense_service(session) -> ExpenseService:
    return ExpenseService(session, RoomRepository(session), LedgerRepository(session))


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def user_service(session, mailer) -> UserService:
    return UserService(session, UserRepository(session), mailer, require_email_verification=False)


@pytest.fixture
async def client(session_factory, mailer) -> AsyncIterator[httpx.AsyncClient]:
    async def override_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_mailer] = lambda: mailer

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
