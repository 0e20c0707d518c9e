import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.auth_service import StaticAuthService
from src.depends import create_engine_for, get_auth_service, get_session

# Registers the tables on SQLModel.metadata
from src.domain import Invoice, LineItem  # noqa: F401

TEST_USER_ID = "user-integration"


@pytest_asyncio.fixture(scope="function")
async def engine():
    """In-memory SQLite database, one per test, foreign keys enforced"""
    engine = create_engine_for(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest.fixture
def auth_service():
    return StaticAuthService(TEST_USER_ID, "owner@acme.example")


@pytest.fixture
def app(db_session, auth_service):
    """Application with database session and auth overrides"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    return app


@pytest_asyncio.fixture
async def client(app):
    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
