"""
Shared pytest fixtures for the SEO Meta Analyzer test suite.

Provides:
  - ``FixedRandom``: a stand-in random source that pins the technical score.
  - Tag mapping factories for a fully optimized page and an empty page.
  - ``memory_store`` / ``sqlite_store``: fresh analysis stores per test.
"""

from __future__ import annotations

import pytest

from database import MemoryAnalysisStore, SQLiteAnalysisStore


class FixedRandom:
    """Random source whose ``randint`` always returns ``offset``."""

    def __init__(self, offset: int) -> None:
        self.offset = offset
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return self.offset


# ── Tag mappings ──────────────────────────────────────────────────────────────

@pytest.fixture
def optimized_meta() -> dict[str, str]:
    return {"title": "A" * 45, "description": "B" * 140, "viewport": "width=device-width"}


@pytest.fixture
def optimized_og() -> dict[str, str]:
    return {"og:title": "x", "og:description": "y", "og:image": "z", "og:url": "w"}


@pytest.fixture
def optimized_twitter() -> dict[str, str]:
    return {"twitter:card": "summary"}


# ── Stores ────────────────────────────────────────────────────────────────────

@pytest.fixture
def memory_store() -> MemoryAnalysisStore:
    return MemoryAnalysisStore()


@pytest.fixture
def sqlite_store(tmp_path) -> SQLiteAnalysisStore:
    store = SQLiteAnalysisStore(tmp_path / "analyses.db")
    store.init_db()
    return store


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request, memory_store, sqlite_store):
    """Each store implementation in turn."""
    return memory_store if request.param == "memory" else sqlite_store
