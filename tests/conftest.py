"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fakes import FakeCatalog, FakeGenerator, candidates, make_entry
from vibematch.api.recommendations import get_engine
from vibematch.main import app
from vibematch.services.metadata.genres import GenreCache
from vibematch.services.metadata.tmdb import TMDBService
from vibematch.services.recommendations import HybridRecommendationEngine
from vibematch.utils.events import MemoryEventRecorder
from vibematch.utils.retry import NO_RETRY


@pytest.fixture
def recorder() -> MemoryEventRecorder:
    return MemoryEventRecorder()


@pytest.fixture
def tmdb_factory(recorder: MemoryEventRecorder) -> Callable[..., TMDBService]:
    """Build a TMDBService whose HTTP calls go to a handler function."""

    def factory(handler: Callable[[httpx.Request], httpx.Response], api_key: str = "test-key") -> TMDBService:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return TMDBService(
            api_key=api_key,
            client=client,
            recorder=recorder,
            genres=GenreCache(),
            limiter=None,
            retry_config=NO_RETRY,
        )

    return factory


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    return FakeCatalog(
        titles={
            "Game Night": make_entry(1, "Game Night"),
            "Palm Springs": make_entry(2, "Palm Springs"),
            "The Nice Guys": make_entry(3, "The Nice Guys"),
        }
    )


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator(candidates("Game Night", "Palm Springs", "The Nice Guys"))


@pytest_asyncio.fixture
async def client(fake_catalog: FakeCatalog, fake_generator: FakeGenerator) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client backed by an engine over in-memory fakes."""
    engine = HybridRecommendationEngine(fake_catalog, fake_generator, recorder=MemoryEventRecorder())

    app.dependency_overrides[get_engine] = lambda: engine

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
