"""Category scores computed from extracted meta, Open Graph and Twitter tags.

A tag counts as present when its key exists with a non-empty value. The
technical score is a random placeholder; pass ``rng`` to pin it in tests.
"""

import random
from typing import Protocol

from models import ScoreRecord, TagMapping

TITLE_LENGTH_RANGE = (30, 60)
DESCRIPTION_LENGTH_RANGE = (120, 160)

WELL_OPTIMIZED_THRESHOLD = 80
LOW_SCORE_THRESHOLD = 60
TECHNICAL_REVIEW_THRESHOLD = 90

TITLE_OPTIMAL_POINTS = 40
TITLE_PRESENT_POINTS = 20
DESCRIPTION_OPTIMAL_POINTS = 40
DESCRIPTION_PRESENT_POINTS = 20
VIEWPORT_POINTS = 20

SOCIAL_TAG_POINTS: dict[str, int] = {
    "og:title": 25,
    "og:description": 25,
    "og:image": 25,
    "og:url": 15,
}
TWITTER_CARD_POINTS = 10

TECHNICAL_BASELINE = 85
TECHNICAL_MAX_OFFSET = 14


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


def tag_value(tags: TagMapping | None, key: str) -> str:
    """Return the tag content, or an empty string when absent."""
    if not tags:
        return ""
    value = tags.get(key)
    return value if isinstance(value, str) else ""


def has_tag(tags: TagMapping | None, key: str) -> bool:
    return tag_value(tags, key) != ""


def length_in_range(value: str, bounds: tuple[int, int]) -> bool:
    low, high = bounds
    return low <= len(value) <= high


def _length_points(value: str, bounds: tuple[int, int], optimal: int, present: int) -> int:
    if not value:
        return 0
    return optimal if length_in_range(value, bounds) else present


def meta_score(meta_tags: TagMapping | None) -> int:
    score = _length_points(
        tag_value(meta_tags, "title"),
        TITLE_LENGTH_RANGE,
        TITLE_OPTIMAL_POINTS,
        TITLE_PRESENT_POINTS,
    )
    score += _length_points(
        tag_value(meta_tags, "description"),
        DESCRIPTION_LENGTH_RANGE,
        DESCRIPTION_OPTIMAL_POINTS,
        DESCRIPTION_PRESENT_POINTS,
    )
    if has_tag(meta_tags, "viewport"):
        score += VIEWPORT_POINTS
    return score


def social_score(og_tags: TagMapping | None, twitter_tags: TagMapping | None) -> int:
    score = sum(points for key, points in SOCIAL_TAG_POINTS.items() if has_tag(og_tags, key))
    if has_tag(twitter_tags, "twitter:card"):
        score += TWITTER_CARD_POINTS
    return score


def technical_score(rng: RandomSource | None = None) -> int:
    """Placeholder until page speed and structured data are measured for real."""
    source = rng if rng is not None else random
    return TECHNICAL_BASELINE + source.randint(0, TECHNICAL_MAX_OFFSET)


def calculate_scores(
    meta_tags: TagMapping | None,
    og_tags: TagMapping | None,
    twitter_tags: TagMapping | None,
    rng: RandomSource | None = None,
) -> ScoreRecord:
    meta = meta_score(meta_tags)
    social = social_score(og_tags, twitter_tags)
    technical = technical_score(rng)

    # meta and social top out at 100 and technical at 99
    overall = round((meta + social + technical) / 3)
    assert 0 <= overall <= 100, f"overall score out of range: {overall}"

    return {
        "overall": overall,
        "meta": meta,
        "social": social,
        "technical": technical,
    }


def score_status(score: int) -> str:
    if score >= WELL_OPTIMIZED_THRESHOLD:
        return "excellent"
    if score >= LOW_SCORE_THRESHOLD:
        return "good"
    return "needs-work"
