# utils.py — tokenizer, query helpers, console formatting
from __future__ import annotations
import re
from typing import Any, Dict, Iterable, List

import config

# ─────────────────────────── constants ────────────────────────────
MIN_TOKEN_LEN = 3
STOP_WORDS = frozenset("""
    a an and are as at be but by for if in into is it no not of on or such
    that the their then there these they this to was will with from has have
    had do does did page
""".split())
# ──────────────────────────────────────────────────────────────────

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")

# ─────────────────────────── tokenizer ────────────────────────────
def tokenize(text: str) -> List[str]:
    """Lowercase alphanumeric index terms, minus stop words and short tokens."""
    cleaned = _NON_ALNUM_RE.sub(" ", text.lower())
    return [t for t in cleaned.split()
            if len(t) >= MIN_TOKEN_LEN and t not in STOP_WORDS]

# ─────────────────────────── query helpers ────────────────────────
def normalize_query(query: str) -> str:
    return query.strip().lower()

def clamp_limit(raw: Any, default: int | None = None,
                maximum: int | None = None) -> int:
    """
    Parse a caller-supplied limit; garbage ↦ default, then clamp to [1, max].
    """
    default = config.DEFAULT_LIMIT if default is None else default
    maximum = config.MAX_LIMIT if maximum is None else maximum
    try:
        value = int(raw) if raw not in (None, "") else default
    except (TypeError, ValueError):
        value = default
    return max(1, min(value, maximum))

def make_snippet(content: str, length: int | None = None) -> str:
    length = config.SNIPPET_CHARS if length is None else length
    return content[:length] + "..."

# ─────────────────────── pretty-print search hits ─────────────────
def format_search_results(results: Iterable[Dict[str, Any]]) -> str:
    """Human-friendly console view of search hits."""
    results = list(results)
    if not results:
        return "No results found."
    return "\n".join(
        f"{i+1}. {r.get('title','N/A')}\n"
        f"   {r.get('url','N/A')}\n"
        f"   {r.get('snippet','')}\n"
        for i, r in enumerate(results)
    )
