"""
Runtime settings may be overridden in a .env file in the backend root:

SEO_DB_PATH=/var/lib/seo-analyzer/analyses.db
FETCH_TIMEOUT_SECONDS=10
LOG_LEVEL=DEBUG

The app loads environment variables automatically using python-dotenv.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

BACKEND_DIR = Path(__file__).resolve().parent

load_dotenv(dotenv_path=BACKEND_DIR / ".env")

DB_PATH = Path(os.getenv("SEO_DB_PATH", "").strip() or BACKEND_DIR / "seo_analyzer.db")
FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "10"))
FETCH_USER_AGENT = os.getenv("FETCH_USER_AGENT", "").strip() or "SEO Meta Analyzer Bot 1.0"
ANALYSIS_CACHE_SECONDS = int(os.getenv("ANALYSIS_CACHE_SECONDS", "300"))
RECENT_ANALYSES_LIMIT = int(os.getenv("RECENT_ANALYSES_LIMIT", "10"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
CORS_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
] or ["*"]
