# web_search.py — DuckDuckGo / Startpage HTML proxy (ExternalProxy source)
from __future__ import annotations
from typing import Dict, List
from urllib.parse import quote_plus
import html, logging, time
import requests
from bs4 import BeautifulSoup

from fetcher import _ua

logger = logging.getLogger(__name__)

# ────────────────────────── constants ────────────────────────── #
_DDG_HTML  = "https://html.duckduckgo.com/html/"
_STARTPAGE = "https://www.startpage.com/do/search"
_TIMEOUT   = 10
_TITLE_CAP, _SNIPPET_CAP = 100, 200

def _headers() -> Dict[str, str]:
    return {
        "User-Agent": _ua(),
        "Referer": "https://duckduckgo.com/",
        "Accept-Language": "en-US,en;q=0.9",
    }

# ─────────────────────── helpers ─────────────────────────────── #
def _clean_hit(href: str) -> bool:
    """True if the URL should be kept (drops ads / trackers)."""
    if not href.startswith("http"):
        return False
    bad_sub = ("duckduckgo.com/y.js", "adserver", "bing.com/aclick")
    return not any(s in href for s in bad_sub)

def _hit(title: str, url: str, snippet: str) -> Dict[str, str]:
    return {"title": title[:_TITLE_CAP],
            "url": url,
            "snippet": html.unescape(snippet)[:_SNIPPET_CAP] or "No description"}

def search_elsewhere_url(query: str) -> str:
    return f"https://duckduckgo.com/?q={quote_plus(query)}"

def _ddg_html(query: str, k: int) -> List[Dict[str, str]]:
    """
    DuckDuckGo lightweight HTML search (GET).
    Update selectors here if DDG tweaks markup again.
    """
    r = requests.get(_DDG_HTML, params={"q": query, "kl": "us-en"},
                     headers=_headers(), timeout=_TIMEOUT)
    r.raise_for_status()

    soup = BeautifulSoup(r.text, "html.parser")
    hits: List[Dict[str, str]] = []
    for body in soup.select("div.result__body"):
        a = body.select_one("a.result__a")
        if not a:
            continue
        href = a.get("href", "")
        if not _clean_hit(href):
            continue
        snip = body.select_one(".result__snippet")
        hits.append(_hit(a.get_text(" ", strip=True), href,
                         snip.get_text(" ", strip=True) if snip else ""))
        if len(hits) >= k:
            break
    return hits

def _startpage_html(query: str, k: int) -> List[Dict[str, str]]:
    """Fallback search using Startpage Lite."""
    hdrs = {**_headers(), "Referer": "https://www.startpage.com/"}
    r = requests.get(_STARTPAGE, params={"query": query, "language": "english"},
                     headers=hdrs, timeout=_TIMEOUT)
    r.raise_for_status()

    soup = BeautifulSoup(r.text, "html.parser")
    hits: List[Dict[str, str]] = []
    for res in soup.select("a.w-gl__result-title"):
        href = res.get("href", "")
        if not _clean_hit(href):
            continue
        snip = res.find_next("p", class_="w-gl__description")
        hits.append(_hit(res.get_text(" ", strip=True), href,
                         snip.get_text(" ", strip=True) if snip else ""))
        if len(hits) >= k:
            break
    return hits

# ─────────────────────── public API ──────────────────────────── #
def search_web(query: str, max_results: int = 15) -> List[Dict[str, str]]:
    """DuckDuckGo first, Startpage second; [] when both are unavailable."""
    t0 = time.time()
    try:
        results = _ddg_html(query, k=max_results)
    except requests.RequestException as e:
        logger.warning("DuckDuckGo failed (%s); trying Startpage.", e)
        try:
            results = _startpage_html(query, k=max_results)
        except requests.RequestException as e2:
            logger.warning("Startpage also failed: %s", e2)
            results = []

    logger.info("PROXY «%s» ↳ %d hits in %.0f ms",
                query, len(results), (time.time() - t0) * 1000)
    return results
