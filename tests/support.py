"""Test helpers shared across unit, property and integration tests."""

from typing import Callable, Iterable, Optional

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from placement_backfill.config import Settings
from placement_backfill.database import Base
from placement_backfill.models.location import LocationL10n
from placement_backfill.schemas.placement import ResolutionResult, ResolutionStatus


TEST_API_URL = "https://api.liteapi.test/v3.0/data/places"


def make_settings(**overrides) -> Settings:
    """Build settings for tests without touching the environment."""
    values = {
        "db_host": "localhost",
        "db_user": "test",
        "db_password": "test",
        "db_database": "test_db",
        "lite_api_key": "test_lite_api_key",
        "lite_api_url": TEST_API_URL,
    }
    values.update(overrides)
    return Settings(**values)


def places_transport(
    handler: Callable[[httpx.Request], httpx.Response],
    calls: Optional[list] = None
) -> httpx.MockTransport:
    """Wrap a request handler in a MockTransport that records every request."""
    def record(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return handler(request)
    return httpx.MockTransport(record)


def places_by_name(places: dict) -> Callable[[httpx.Request], httpx.Response]:
    """Handler answering each textQuery with the placeIds listed for it."""
    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.params["textQuery"]
        outcome = places.get(name, [])
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return outcome
        return httpx.Response(
            200,
            json={"data": [{"placeId": place_id, "displayName": name} for place_id in outcome]}
        )
    return handler


class FakeResolver:
    """Resolver stand-in returning canned results keyed by location name."""

    def __init__(self, results: Optional[dict] = None, error: Optional[Exception] = None):
        self.results = results or {}
        self.error = error
        self.calls: list = []

    async def resolve(self, name: str) -> ResolutionResult:
        self.calls.append(name)
        if self.error is not None:
            raise self.error
        outcome = self.results.get(name)
        if isinstance(outcome, ResolutionResult):
            return outcome
        if outcome:
            return ResolutionResult.found(outcome)
        return ResolutionResult.absent(ResolutionStatus.NO_MATCH)


async def create_location_engine(url: str = "sqlite+aiosqlite://") -> AsyncEngine:
    """SQLite engine with the location_l10n table created."""
    engine = create_async_engine(url, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


async def seed_locations(
    session_maker: async_sessionmaker[AsyncSession],
    rows: Iterable[tuple]
) -> None:
    """Insert (location_id, name, placement_id) rows."""
    async with session_maker() as session:
        session.add_all([
            LocationL10n(location_id=location_id, name=name, placement_id=placement_id)
            for location_id, name, placement_id in rows
        ])
        await session.commit()


async def placements_by_id(session_maker: async_sessionmaker[AsyncSession]) -> dict:
    """Map every location_id to its stored placement_id."""
    async with session_maker() as session:
        result = await session.execute(
            select(LocationL10n.location_id, LocationL10n.placement_id)
        )
        return {location_id: placement_id for location_id, placement_id in result.all()}
