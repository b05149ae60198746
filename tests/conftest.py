"""Pytest configuration and fixtures."""

import asyncio
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

import pytest

# Ensure src is on path when running tests without installed package
src = Path(__file__).resolve().parent.parent / "src"
if src.exists() and str(src) not in sys.path:
    sys.path.insert(0, str(src))

from flight_aggregator.domain.models import Flight, SearchQuery  # noqa: E402

WIB = timezone(timedelta(hours=7))   # Jakarta
WITA = timezone(timedelta(hours=8))  # Bali


def _make_flight(**overrides) -> Flight:
    fields = dict(
        flight_code="GA400",
        airline="Garuda Indonesia",
        airline_code="GA",
        origin="CGK",
        destination="DPS",
        departure_time=datetime(2025, 6, 1, 6, 0, tzinfo=WIB),
        arrival_time=datetime(2025, 6, 1, 8, 50, tzinfo=WITA),
        duration_minutes=110,
        stops=0,
        price=1_250_000,
        available_seats=28,
        provider="Garuda Indonesia",
    )
    fields.update(overrides)
    return Flight(**fields)


class FakeProvider:
    """Provedor em memória para testes de agregação."""

    def __init__(
        self,
        name: str,
        flights: Optional[List[Flight]] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.name = name
        self._flights = flights or []
        self._error = error
        self._delay = delay
        self.calls = 0

    async def search(self, query: SearchQuery) -> List[Flight]:
        self.calls += 1
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return list(self._flights)


class FakeClock:
    """Relógio manual para testar expiração."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def anyio_backend():
    """Use only asyncio backend (trio not installed)."""
    return "asyncio"


@pytest.fixture
def make_flight():
    return _make_flight


@pytest.fixture
def base_query() -> SearchQuery:
    return SearchQuery(origin="CGK", destination="DPS", departure_date="2025-06-01")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
