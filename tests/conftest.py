import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from statusboard.core.database import Base
from statusboard.services.incidents.repository import IncidentRepository
from statusboard.services.incidents.sources import InMemoryIncidentSource
from statusboard.services.uptime import UptimeStore
from tests.helpers import FAKE_BASE_URL, INCIDENT_DOCS, make_services
from tests.mocks import fake_services


@pytest.fixture
def services():
    return make_services()


@pytest.fixture(autouse=True)
def reset_fake_services():
    fake_services.reset()
    yield
    fake_services.reset()


@pytest_asyncio.fixture
async def fake_client():
    """httpx client whose requests are served in-process by the fake health app."""
    transport = ASGITransport(app=fake_services.app)
    async with AsyncClient(transport=transport, base_url=FAKE_BASE_URL) as client:
        yield client


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite engine for tests."""
    engine = create_async_engine("sqlite+aiosqlite://", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def uptime_store(session_factory):
    return UptimeStore(session_factory)


@pytest.fixture
def incident_repository():
    return IncidentRepository(InMemoryIncidentSource(INCIDENT_DOCS))


@pytest_asyncio.fixture
async def app_with_state(fake_client, session_factory, incident_repository):
    """FastAPI app wired to the fake health app, in-memory uptime DB and in-memory incidents."""
    from statusboard.main import app

    app.state.services = make_services()
    app.state.http_client = fake_client
    app.state.probe_timeout = 2.0
    app.state.uptime_store = UptimeStore(session_factory)
    app.state.incident_repository = incident_repository

    yield app


@pytest_asyncio.fixture
async def client(app_with_state):
    """Async HTTP client against the status page API."""
    transport = ASGITransport(app=app_with_state)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
