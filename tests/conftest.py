"""
Shared fixtures: a fake clock, a fake Guesty client and a TestClient wired to it.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Generator, Optional

import pytest
from fastapi.testclient import TestClient

from guesty_report.dependencies import get_guesty_client
from guesty_report.main import app

FIXED_NOW = datetime(2025, 6, 30, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeGuestyClient:
    """Stand-in for GuestyClient that serves canned records and records calls."""

    def __init__(
        self,
        listings: Optional[list[dict[str, Any]]] = None,
        reservations: Optional[list[dict[str, Any]]] = None,
        error: Optional[Exception] = None,
    ):
        self.listings = listings or []
        self.reservations = reservations or []
        self.error = error
        self.calls: list[str] = []
        self.check_in_from: Optional[datetime] = None

    def fetch_listings(self) -> list[dict[str, Any]]:
        self.calls.append("listings")
        if self.error:
            raise self.error
        return self.listings

    def fetch_reservations(
        self, check_in_from: Optional[datetime] = None
    ) -> list[dict[str, Any]]:
        self.calls.append("reservations")
        self.check_in_from = check_in_from
        if self.error:
            raise self.error
        return self.reservations


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_client() -> FakeGuestyClient:
    return FakeGuestyClient()


@pytest.fixture
def api_client(fake_client: FakeGuestyClient) -> Generator[TestClient, None, None]:
    """FastAPI test client whose Guesty dependency is the fake client."""
    app.dependency_overrides[get_guesty_client] = lambda: fake_client
    yield TestClient(app)
    app.dependency_overrides.clear()
