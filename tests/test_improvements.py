"""Tests for backend/improvements.py."""

from __future__ import annotations

from improvements import build_improvement_plan


def _category(plan, name: str):
    return next(cat for cat in plan["categories"] if cat["name"] == name)


def test_empty_page_plan() -> None:
    scores = {"overall": 28, "meta": 0, "social": 0, "technical": 85}
    plan = build_improvement_plan({}, {}, {}, scores)

    meta = _category(plan, "Meta Tags")
    assert [win["text"] for win in meta["improvements"]] == [
        "Add title tag",
        "Add meta description",
        "Add viewport meta tag",
    ]
    assert meta["potential_points"] == 100
    assert meta["potential_score"] == 100
    assert meta["status"] == "needs-work"

    social = _category(plan, "Social Media")
    assert [win["points"] for win in social["improvements"]] == [25, 25, 25, 15, 10]

    technical = _category(plan, "Technical")
    assert [win["text"] for win in technical["improvements"]] == ["Optimize page speed"]
    assert technical["status"] == "excellent"

    assert plan["total_improvements"] == 9
    assert plan["total_points"] == 205
    assert plan["potential_overall"] == 96
    assert "from 28 to 96" in plan["summary"]


def test_length_fixes_are_worth_twenty() -> None:
    scores = {"overall": 50, "meta": 40, "social": 0, "technical": 95}
    plan = build_improvement_plan({"title": "T" * 10, "description": "D" * 10}, {}, {}, scores)

    meta = _category(plan, "Meta Tags")
    assert meta["improvements"] == [
        {"text": "Optimize title length", "points": 20},
        {"text": "Optimize description length", "points": 20},
        {"text": "Add viewport meta tag", "points": 20},
    ]
    assert meta["potential_score"] == 100


def test_complete_page_has_nothing_left(optimized_meta, optimized_og, optimized_twitter) -> None:
    scores = {"overall": 100, "meta": 100, "social": 100, "technical": 99}
    plan = build_improvement_plan(optimized_meta, optimized_og, optimized_twitter, scores)

    assert plan["total_improvements"] == 0
    assert plan["total_points"] == 0
    assert plan["potential_overall"] == 100
    assert plan["summary"].startswith("Your SEO implementation is excellent")
    assert all(cat["potential_score"] == cat["score"] for cat in plan["categories"])


def test_potential_overall_is_capped() -> None:
    scores = {"overall": 95, "meta": 80, "social": 90, "technical": 99}
    plan = build_improvement_plan({"title": "T" * 45, "description": "D" * 140}, {"og:title": "x"}, {}, scores)
    assert plan["potential_overall"] == 100
