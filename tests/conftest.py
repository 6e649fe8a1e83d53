"""Shared pytest fixtures for the split-stream test suite.

Guidelines
----------
* No internet access in any test.
* yt-dlp must be mocked at the infra boundary.
* Core tests use real in-memory collaborators and a fake clock.
"""

from __future__ import annotations

import pytest

from split_stream.core.session import Session
from split_stream.infra.memory import MemoryFavoritesStore, MemorySink, StaticIdentity

T0: float = 1_700_000_000.0


class FakeClock:
    """Manually advanced epoch-seconds clock."""

    def __init__(self, start: float = T0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def identity() -> StaticIdentity:
    return StaticIdentity("user-1")


@pytest.fixture
def favorites() -> MemoryFavoritesStore:
    return MemoryFavoritesStore()


@pytest.fixture
def session(
    clock: FakeClock,
    sink: MemorySink,
    identity: StaticIdentity,
    favorites: MemoryFavoritesStore,
) -> Session:
    return Session(
        4,
        identity=identity,
        sink=sink,
        favorites=favorites,
        clock=clock,
        session_id="session_test",
    )
