"""Pytest configuration and fixtures for stepwise tests.

Provides reusable fixtures for repositories, renderers, events, an
in-memory SQLite database and an HTTP client.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from stepwise.database import Base
from stepwise.main import app
from stepwise.routers.wizard import get_events, get_repository
from stepwise.wizard import InMemoryWizardRepository, WizardEvents
from stepwise.wizard.events import WizardFinished, WizardFinishing, WizardLoaded, WizardSaving

from support import NameStep, RecordingHooks, RecordingRenderer


# ── Wizard collaborators ─────────────────────────────────────

@pytest.fixture
def repository() -> InMemoryWizardRepository:
    return InMemoryWizardRepository()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def hooks() -> RecordingHooks:
    return RecordingHooks(cancel_label="Stop setup")


@pytest.fixture
def events() -> WizardEvents:
    return WizardEvents()


@pytest.fixture
def fired(events: WizardEvents) -> list[str]:
    """Names of lifecycle events in the order they were dispatched."""
    names: list[str] = []
    for event_type in (WizardLoaded, WizardSaving, WizardFinishing, WizardFinished):
        events.listen(event_type, lambda event: names.append(type(event).__name__))
    return names


@pytest.fixture
def make_wizard(repository, renderer, events):
    """Build a wizard class with the shared test collaborators."""

    def factory(wizard_class, **kwargs):
        kwargs.setdefault("events", events)
        return wizard_class(
            kwargs.pop("repository", repository),
            kwargs.pop("renderer", renderer),
            **kwargs,
        )

    return factory


@pytest.fixture(autouse=True)
def _reset_step_counters():
    NameStep.before_saving_calls = 0
    yield
    NameStep.before_saving_calls = 0


# ── Database ─────────────────────────────────────────────────

@pytest_asyncio.fixture
async def test_engine():
    """In-memory SQLite engine with the wizard tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()


# ── HTTP client ──────────────────────────────────────────────

@pytest_asyncio.fixture
async def client(repository, events) -> AsyncGenerator[AsyncClient, None]:
    """Test client backed by the in-memory repository."""
    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_events] = lambda: events

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ── Test Markers ─────────────────────────────────────────────

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "api: HTTP endpoint tests")
    config.addinivalue_line("markers", "integration: Tests against a database")
