"""Score improvement roadmap: every unmet criterion and the points it is worth."""

from models import CategoryImprovement, ImprovementPlan, QuickWin, ScoreRecord, TagMapping
from scoring import (
    DESCRIPTION_LENGTH_RANGE,
    DESCRIPTION_OPTIMAL_POINTS,
    DESCRIPTION_PRESENT_POINTS,
    SOCIAL_TAG_POINTS,
    TECHNICAL_BASELINE,
    TECHNICAL_REVIEW_THRESHOLD,
    TITLE_LENGTH_RANGE,
    TITLE_OPTIMAL_POINTS,
    TITLE_PRESENT_POINTS,
    TWITTER_CARD_POINTS,
    VIEWPORT_POINTS,
    WELL_OPTIMIZED_THRESHOLD,
    has_tag,
    length_in_range,
    score_status,
    tag_value,
)


def _category(name: str, score: int, candidates: list[tuple[bool, str, int]]) -> CategoryImprovement:
    wins: list[QuickWin] = [
        {"text": text, "points": points} for applies, text, points in candidates if applies
    ]
    potential_points = sum(win["points"] for win in wins)
    return {
        "name": name,
        "score": score,
        "status": score_status(score),
        "improvements": wins,
        "potential_points": potential_points,
        "potential_score": min(100, score + potential_points),
    }


def _meta_candidates(meta_tags: TagMapping | None) -> list[tuple[bool, str, int]]:
    title = tag_value(meta_tags, "title")
    description = tag_value(meta_tags, "description")
    return [
        (not title, "Add title tag", TITLE_OPTIMAL_POINTS),
        (
            bool(title) and not length_in_range(title, TITLE_LENGTH_RANGE),
            "Optimize title length",
            TITLE_OPTIMAL_POINTS - TITLE_PRESENT_POINTS,
        ),
        (not description, "Add meta description", DESCRIPTION_OPTIMAL_POINTS),
        (
            bool(description) and not length_in_range(description, DESCRIPTION_LENGTH_RANGE),
            "Optimize description length",
            DESCRIPTION_OPTIMAL_POINTS - DESCRIPTION_PRESENT_POINTS,
        ),
        (not has_tag(meta_tags, "viewport"), "Add viewport meta tag", VIEWPORT_POINTS),
    ]


def _social_candidates(
    og_tags: TagMapping | None, twitter_tags: TagMapping | None
) -> list[tuple[bool, str, int]]:
    candidates = [
        (not has_tag(og_tags, key), f"Add {key}", points) for key, points in SOCIAL_TAG_POINTS.items()
    ]
    candidates.append((not has_tag(twitter_tags, "twitter:card"), "Add Twitter Card", TWITTER_CARD_POINTS))
    return candidates


def _technical_candidates(technical: int) -> list[tuple[bool, str, int]]:
    return [
        (technical < TECHNICAL_REVIEW_THRESHOLD, "Optimize page speed", 5),
        (technical < TECHNICAL_BASELINE, "Add structured data", 5),
        (technical < WELL_OPTIMIZED_THRESHOLD, "Improve mobile experience", 10),
    ]


def build_improvement_plan(
    meta_tags: TagMapping | None,
    og_tags: TagMapping | None,
    twitter_tags: TagMapping | None,
    scores: ScoreRecord,
) -> ImprovementPlan:
    """
    List the quick wins per category, ungated by score thresholds.

    The overall potential assumes each point lands in one of three equally
    weighted categories, so it grows by a third of the total.
    """
    categories = [
        _category("Meta Tags", scores["meta"], _meta_candidates(meta_tags)),
        _category("Social Media", scores["social"], _social_candidates(og_tags, twitter_tags)),
        _category("Technical", scores["technical"], _technical_candidates(scores["technical"])),
    ]

    total_improvements = sum(len(cat["improvements"]) for cat in categories)
    total_points = sum(cat["potential_points"] for cat in categories)
    current_overall = scores["overall"]
    potential_overall = min(100, current_overall + total_points // 3)

    if total_improvements == 0:
        summary = "Your SEO implementation is excellent! All major optimizations are in place."
    else:
        summary = (
            f"Implementing {total_improvements} improvements could boost your overall score "
            f"from {current_overall} to {potential_overall} points."
        )

    return {
        "categories": categories,
        "total_improvements": total_improvements,
        "total_points": total_points,
        "current_overall": current_overall,
        "potential_overall": potential_overall,
        "summary": summary,
    }
