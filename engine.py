# engine.py — query → cache → source → ranked results
"""
The search pipeline. A `ResultSource` turns a query into results;
`SearchEngine` puts the query cache in front of it.

    LiveCrawlSource      seeds → crawl → index → BM25   (default)
    ExternalProxySource  DuckDuckGo / Startpage HTML     (BUBBLE_RESULT_SOURCE=duckduckgo)

Whatever happens during a crawl, the caller gets *some* list back: ranked
hits, pointers to the seed URLs, or a single "search elsewhere" pointer.
"""

from __future__ import annotations

import abc, logging, time
from dataclasses import dataclass
from typing import List, Optional, Sequence
from urllib.parse import urlparse

import config, rag, web_search
from crawler import FetchFn, crawl
from fetcher import fetch_page
from memory import QueryCache, Result
from seeds import generate_seeds
from utils import clamp_limit

logger = logging.getLogger(__name__)


@dataclass
class SourceOutcome:
    results: List[Result]
    cacheable: bool = True
    pages_indexed: int = 0


# ─────────────────────── fallback pointers ───────────────────────
def seed_pointers(seeds: Sequence[str], limit: int) -> List[Result]:
    return [{"title": f"Resource: {urlparse(u).hostname}",
             "url": u,
             "snippet": "Related resource for your query"}
            for u in seeds[:limit]]

def search_elsewhere(query: str) -> List[Result]:
    return [{"title": f"Search the web for “{query}”",
             "url": web_search.search_elsewhere_url(query),
             "snippet": "Nothing matched in the pages crawled for this query."}]


# ─────────────────────── result sources ──────────────────────────
class ResultSource(abc.ABC):
    """Capability: query → results. Subclasses pick where they come from."""

    name = "abstract"

    @abc.abstractmethod
    def search(self, query: str, limit: int) -> SourceOutcome:
        ...


class LiveCrawlSource(ResultSource):
    name = "crawl"

    def __init__(self, fetch: FetchFn = fetch_page, **crawl_kwargs) -> None:
        self.fetch = fetch
        self.crawl_kwargs = crawl_kwargs        # max_pages, time_budget, …

    def search(self, query: str, limit: int) -> SourceOutcome:
        seeds = generate_seeds(query)
        logger.info("FRESH-CRAWL «%s» from %d seeds", query, len(seeds))
        session = crawl(seeds, fetch=self.fetch, **self.crawl_kwargs)
        docs = session.documents

        if not docs:
            logger.info("FALLBACK no pages crawled for «%s»; using seed URLs", query)
            return SourceOutcome(seed_pointers(seeds, limit), cacheable=False)

        index, doc_freq = rag.build_index(docs)
        scores = rag.rank(docs, index, doc_freq, query)
        ranked = rag.top_results(docs, scores, limit)
        if not ranked:
            return SourceOutcome(search_elsewhere(query), cacheable=False,
                                 pages_indexed=len(docs))
        return SourceOutcome([r.public() for r in ranked], pages_indexed=len(docs))


class ExternalProxySource(ResultSource):
    name = "duckduckgo"

    def search(self, query: str, limit: int) -> SourceOutcome:
        hits = web_search.search_web(query, max_results=limit)
        if not hits:
            return SourceOutcome(search_elsewhere(query), cacheable=False)
        return SourceOutcome(hits[:limit])


_SOURCES = {cls.name: cls for cls in (LiveCrawlSource, ExternalProxySource)}

def source_from_config(name: str | None = None) -> ResultSource:
    name = (name or config.RESULT_SOURCE).lower()
    try:
        return _SOURCES[name]()
    except KeyError:
        raise ValueError(f"unknown result source {name!r}; "
                         f"expected one of {sorted(_SOURCES)}") from None


# ─────────────────────── public API ──────────────────────────────
class SearchEngine:
    def __init__(self, source: Optional[ResultSource] = None,
                 cache: Optional[QueryCache] = None) -> None:
        self.source = source or source_from_config()
        self.cache = cache if cache is not None else QueryCache()

    def search(self, query: str, limit: int | None = None) -> List[Result]:
        """Up to `limit` {title, url, snippet} dicts for `query`."""
        if not query or not query.strip():
            raise ValueError("query must be a non-empty string")
        query = query.strip()
        limit = clamp_limit(limit)

        cached = self.cache.get(query)
        if cached is not None:
            logger.info("CACHE-HIT «%s» – %d cached results", query, len(cached.results))
            return [dict(r) for r in cached.results[:limit]]

        t0 = time.monotonic()
        # rank to the ceiling so a later, larger limit is still served from cache
        outcome = self.source.search(query, config.MAX_LIMIT)
        elapsed_ms = int((time.monotonic() - t0) * 1000)

        if outcome.cacheable:
            self.cache.put(query, outcome.results,
                           stats={"pages_indexed": outcome.pages_indexed,
                                  "elapsed_ms": elapsed_ms})
        logger.info("SEARCH-SUCCESS «%s» – %d results in %d ms from %d pages",
                    query, len(outcome.results), elapsed_ms, outcome.pages_indexed)
        return [dict(r) for r in outcome.results[:limit]]
