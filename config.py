# config.py — crawl / cache / server tunables (env-overridable)
from __future__ import annotations
import os


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(f"BUBBLE_{name}", str(default)))

def _env_float(name: str, default: float) -> float:
    return float(os.getenv(f"BUBBLE_{name}", str(default)))

# ─────────────────────────── crawl budget ─────────────────────────
MAX_CRAWL_TIME     = _env_float("MAX_CRAWL_TIME", 7.0)   # seconds per query
MAX_PAGES          = _env_int("MAX_PAGES", 12)          # visited-set cap
CRAWL_DEPTH_LIMIT  = _env_int("CRAWL_DEPTH_LIMIT", 2)
SEED_FANOUT        = _env_int("SEED_FANOUT", 4)         # seeds crawled in parallel
CRAWL_WORKERS      = _env_int("CRAWL_WORKERS", 8)

# ─────────────────────────── fetcher ──────────────────────────────
FETCH_TIMEOUT      = _env_float("FETCH_TIMEOUT", 3.0)
MAX_REDIRECTS      = _env_int("MAX_REDIRECTS", 2)

# ─────────────────────────── extraction ───────────────────────────
MIN_CONTENT_CHARS  = 100
MAX_CONTENT_CHARS  = 5000
MAX_LINKS_PER_PAGE = 5
SNIPPET_CHARS      = 220

# ─────────────────────────── query cache ──────────────────────────
QUERY_CACHE_TTL    = _env_float("QUERY_CACHE_TTL", 300.0)
QUERY_CACHE_SIZE   = _env_int("QUERY_CACHE_SIZE", 50)

# ─────────────────────────── request limits ───────────────────────
DEFAULT_LIMIT      = _env_int("DEFAULT_LIMIT", 15)
MAX_LIMIT          = _env_int("MAX_LIMIT", 20)

# ─────────────────────────── serving ──────────────────────────────
RESULT_SOURCE      = os.getenv("BUBBLE_RESULT_SOURCE", "crawl")  # crawl | duckduckgo
HOST               = os.getenv("BUBBLE_HOST", "127.0.0.1")
PORT               = _env_int("PORT", 3000)
