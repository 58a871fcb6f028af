"""Data models and types used across the backend.

Database table definitions are in database.py.
Types for the scraper, scoring and recommendation output live here.
"""

from typing import Literal, TypedDict

TagMapping = dict[str, str]

RecommendationType = Literal["success", "warning", "error"]


class ScoreRecord(TypedDict):
    """Category scores for one analysis."""

    overall: int
    meta: int
    social: int
    technical: int


class _RecommendationBase(TypedDict):
    type: RecommendationType
    title: str
    description: str


class Recommendation(_RecommendationBase, total=False):
    """Single advisory item. ``code`` is the literal markup to add, when any."""

    code: str


class PageTags(TypedDict):
    """Structured output from the page scraper."""

    url: str
    domain: str
    title: str
    meta_tags: TagMapping
    og_tags: TagMapping
    twitter_tags: TagMapping


class NewAnalysis(TypedDict):
    """Analysis payload handed to the store before id/timestamp assignment."""

    url: str
    title: str
    domain: str
    meta_tags: TagMapping
    og_tags: TagMapping
    twitter_tags: TagMapping
    scores: ScoreRecord
    recommendations: list[Recommendation]


class AnalysisRecord(NewAnalysis):
    """Stored analysis, as returned by the store."""

    id: int
    analyzed_at: str


class QuickWin(TypedDict):
    text: str
    points: int


class CategoryImprovement(TypedDict):
    name: str
    score: int
    status: str
    improvements: list[QuickWin]
    potential_points: int
    potential_score: int


class ImprovementPlan(TypedDict):
    """Score improvement roadmap for a single analysis."""

    categories: list[CategoryImprovement]
    total_improvements: int
    total_points: int
    current_overall: int
    potential_overall: int
    summary: str
