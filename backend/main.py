"""SEO Meta Analyzer API – FastAPI app and endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from config import ANALYSIS_CACHE_SECONDS, CORS_ORIGINS, DB_PATH, LOG_LEVEL, RECENT_ANALYSES_LIMIT
from database import AnalysisStore, SQLiteAnalysisStore
from improvements import build_improvement_plan
from log_setup import configure_logging
from models import AnalysisRecord
from recommendations import generate_recommendations
from report import build_analysis_pdf, report_filename
from schemas import (
    AnalysisResponse,
    AnalyzeRequest,
    ImprovementPlanResponse,
    SuccessResponse,
)
from scoring import calculate_scores
from scraper import FetchError, fetch_page_tags

logger = logging.getLogger(__name__)

app = FastAPI(
    title="SEO Meta Analyzer API",
    description="Meta, Open Graph and Twitter Card analysis with scores and recommendations",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_store: SQLiteAnalysisStore | None = None


def get_store() -> AnalysisStore:
    global _store
    if _store is None:
        _store = SQLiteAnalysisStore(DB_PATH)
        _store.init_db()
    return _store


@app.on_event("startup")
def startup() -> None:
    configure_logging(LOG_LEVEL)
    get_store()


def _is_fresh(record: AnalysisRecord) -> bool:
    try:
        analyzed_at = datetime.fromisoformat(record["analyzed_at"])
    except (KeyError, TypeError, ValueError):
        return False
    if analyzed_at.tzinfo is None:
        analyzed_at = analyzed_at.replace(tzinfo=timezone.utc)
    age = (datetime.now(timezone.utc) - analyzed_at).total_seconds()
    return age < ANALYSIS_CACHE_SECONDS


def _get_or_404(store: AnalysisStore, analysis_id: int) -> AnalysisRecord:
    record = store.get(analysis_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Analysis not found")
    return record


@app.post("/api/analyze", response_model=AnalysisResponse)
def analyze(body: AnalyzeRequest, store: AnalysisStore = Depends(get_store)) -> AnalysisRecord:
    """
    Pipeline: fetch page -> extract tags -> score -> recommend -> store -> return record.
    A recent analysis of the same URL is returned as-is instead of refetching.
    """
    existing = store.get_by_url(body.url)
    if existing is not None and _is_fresh(existing):
        logger.info("Reusing analysis %s for %s", existing["id"], body.url)
        return existing

    # 1. Fetch and parse the page
    try:
        page = fetch_page_tags(body.url)
    except FetchError as exc:
        logger.error("Analysis failed for %s: %s", body.url, exc)
        raise HTTPException(status_code=502, detail="Failed to analyze website") from exc

    # 2. Score and advise
    scores = calculate_scores(page["meta_tags"], page["og_tags"], page["twitter_tags"])
    recommendations = generate_recommendations(
        page["meta_tags"], page["og_tags"], page["twitter_tags"], scores
    )

    # 3. Store and return
    record = store.create(
        {
            "url": page["url"],
            "title": page["title"],
            "domain": page["domain"],
            "meta_tags": page["meta_tags"],
            "og_tags": page["og_tags"],
            "twitter_tags": page["twitter_tags"],
            "scores": scores,
            "recommendations": recommendations,
        }
    )
    logger.info("Stored analysis %s for %s (overall=%s)", record["id"], body.url, scores["overall"])
    return record


@app.get("/api/recent", response_model=list[AnalysisResponse])
def get_recent(store: AnalysisStore = Depends(get_store)) -> list[AnalysisRecord]:
    """Return recent analyses for the history list."""
    return store.list_recent(RECENT_ANALYSES_LIMIT)


@app.get("/api/analysis/{analysis_id}", response_model=AnalysisResponse)
def get_analysis(analysis_id: int, store: AnalysisStore = Depends(get_store)) -> AnalysisRecord:
    return _get_or_404(store, analysis_id)


@app.get("/api/analysis/{analysis_id}/improvements", response_model=ImprovementPlanResponse)
def get_improvements(analysis_id: int, store: AnalysisStore = Depends(get_store)) -> dict:
    """Return the score improvement roadmap for a stored analysis."""
    record = _get_or_404(store, analysis_id)
    return build_improvement_plan(
        record["meta_tags"], record["og_tags"], record["twitter_tags"], record["scores"]
    )


@app.get("/api/analysis/{analysis_id}/report.pdf")
def get_report(analysis_id: int, store: AnalysisStore = Depends(get_store)) -> Response:
    record = _get_or_404(store, analysis_id)
    return Response(
        content=build_analysis_pdf(record),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(record)}"'},
    )


@app.delete("/api/analysis/{analysis_id}", response_model=SuccessResponse)
def delete_analysis(analysis_id: int, store: AnalysisStore = Depends(get_store)) -> SuccessResponse:
    if not store.delete(analysis_id):
        raise HTTPException(status_code=404, detail="Analysis not found")
    return SuccessResponse(success=True)


@app.delete("/api/analyses", response_model=SuccessResponse)
def clear_analyses(store: AnalysisStore = Depends(get_store)) -> SuccessResponse:
    store.clear()
    logger.info("Cleared all analyses")
    return SuccessResponse(success=True)


@app.get("/health")
def health() -> dict:
    """Health check for deployment."""
    return {"status": "ok"}
