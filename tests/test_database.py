"""
Tests for backend/database.py.

Every test runs against both the SQLite and in-memory stores through the
``any_store`` fixture.
"""

from __future__ import annotations

from database import SQLiteAnalysisStore


def _analysis(url: str = "https://example.com", overall: int = 50) -> dict:
    return {
        "url": url,
        "title": "Example",
        "domain": "example.com",
        "meta_tags": {"title": "Example", "viewport": "width=device-width"},
        "og_tags": {"og:title": "Example"},
        "twitter_tags": {},
        "scores": {"overall": overall, "meta": 40, "social": 25, "technical": 88},
        "recommendations": [
            {
                "type": "error",
                "title": "Missing Meta Description",
                "description": "Add one.",
                "code": '<meta name="description" content="...">',
            },
            {"type": "warning", "title": "Improve Technical SEO", "description": "Speed up."},
        ],
    }


def test_create_assigns_id_and_timestamp(any_store) -> None:
    first = any_store.create(_analysis())
    second = any_store.create(_analysis("https://example.org"))

    assert first["id"] == 1
    assert second["id"] == 2
    assert first["analyzed_at"]
    assert first["scores"]["overall"] == 50


def test_get_round_trips_json_columns(any_store) -> None:
    created = any_store.create(_analysis())
    fetched = any_store.get(created["id"])

    assert fetched is not None
    assert fetched["meta_tags"] == {"title": "Example", "viewport": "width=device-width"}
    assert fetched["recommendations"][0]["code"] == '<meta name="description" content="...">'
    assert "code" not in fetched["recommendations"][1]
    assert fetched["analyzed_at"] == created["analyzed_at"]


def test_get_missing_returns_none(any_store) -> None:
    assert any_store.get(999) is None


def test_get_by_url_returns_latest(any_store) -> None:
    any_store.create(_analysis(overall=10))
    latest = any_store.create(_analysis(overall=70))
    any_store.create(_analysis("https://other.com"))

    found = any_store.get_by_url("https://example.com")
    assert found is not None
    assert found["id"] == latest["id"]
    assert any_store.get_by_url("https://missing.com") is None


def test_list_recent_newest_first(any_store) -> None:
    for i in range(5):
        any_store.create(_analysis(f"https://site{i}.com"))

    recent = any_store.list_recent(3)
    assert [record["url"] for record in recent] == [
        "https://site4.com",
        "https://site3.com",
        "https://site2.com",
    ]


def test_list_recent_clamps_limit(any_store) -> None:
    any_store.create(_analysis())
    assert len(any_store.list_recent(0)) == 1


def test_delete(any_store) -> None:
    created = any_store.create(_analysis())
    assert any_store.delete(created["id"]) is True
    assert any_store.get(created["id"]) is None
    assert any_store.delete(created["id"]) is False


def test_clear(any_store) -> None:
    any_store.create(_analysis())
    any_store.create(_analysis("https://example.org"))
    any_store.clear()
    assert any_store.list_recent(10) == []


def test_sqlite_init_db_is_idempotent(tmp_path) -> None:
    store = SQLiteAnalysisStore(tmp_path / "analyses.db")
    store.init_db()
    store.create(_analysis())
    store.init_db()
    assert len(store.list_recent(10)) == 1
