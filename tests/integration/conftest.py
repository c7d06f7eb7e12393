import bcrypt
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.fake_notifier import CapturingNotifier
from tests.fixtures.json_loader import TestDataLoader
from src.adapter.services.memory_rate_counter_store import MemoryRateCounterStore
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.rate_limiter import RateLimiter
from src.depends import get_notifier, get_rate_limiter, get_unit_of_work
from src.domain.entities import User


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def notifier():
    return CapturingNotifier()


@pytest_asyncio.fixture
def rate_limiter():
    return RateLimiter(MemoryRateCounterStore(), limit=5, window_seconds=3600)


@pytest_asyncio.fixture
async def client(db_session, notifier, rate_limiter):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_user(db_session, test_data) -> dict:
    """
    The fleet admin account from test_data.json, stored with a bcrypt hash.

    Returned as plain values: the app shares db_session and its rollbacks
    expire ORM instances.
    """
    data = test_data.get_copy("admin_user")
    user = User(
        username=data["username"],
        email=data["email"],
        phone=data["phone"],
        password=bcrypt.hashpw(data["password"].encode(), bcrypt.gensalt(4)).decode(),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return {**data, "id": user.id}
