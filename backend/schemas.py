"""Pydantic schemas for API request/response."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from scraper import normalize_url, validate_url


class AnalyzeRequest(BaseModel):
    """Request body for POST /api/analyze."""

    url: str

    @field_validator("url", mode="before")
    @classmethod
    def normalize_and_validate_url(cls, value: object) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("URL is required")
        return validate_url(normalize_url(text))


class ScoresOut(BaseModel):
    overall: int
    meta: int
    social: int
    technical: int


class RecommendationOut(BaseModel):
    """Single advisory item; ``code`` is markup to paste into the page."""

    type: Literal["success", "warning", "error"]
    title: str
    description: str
    code: str | None = None


class AnalysisResponse(BaseModel):
    """Full stored analysis returned by the analyze and lookup endpoints."""

    id: int
    url: str
    title: str | None = None
    domain: str
    meta_tags: dict[str, str] = Field(default_factory=dict)
    og_tags: dict[str, str] = Field(default_factory=dict)
    twitter_tags: dict[str, str] = Field(default_factory=dict)
    scores: ScoresOut
    recommendations: list[RecommendationOut]
    analyzed_at: str


class QuickWinOut(BaseModel):
    text: str
    points: int


class CategoryImprovementOut(BaseModel):
    name: str
    score: int
    status: Literal["excellent", "good", "needs-work"]
    improvements: list[QuickWinOut]
    potential_points: int
    potential_score: int


class ImprovementPlanResponse(BaseModel):
    """Score improvement roadmap for a stored analysis."""

    categories: list[CategoryImprovementOut]
    total_improvements: int
    total_points: int
    current_overall: int
    potential_overall: int
    summary: str


class SuccessResponse(BaseModel):
    success: bool
