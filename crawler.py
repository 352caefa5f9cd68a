# crawler.py — per-query, time-boxed crawl (thread-pool fan-out)
"""
One `crawl()` call == one CrawlSession. The session's visited set and
document list live and die with that call; nothing is shared between
concurrent queries.

The coordinator thread is the only writer of session state. Worker threads
fetch + extract and hand an ExtractedPage back through their Future; a worker
that outlives the deadline finds the session closed and its result is never
read.
"""
from __future__ import annotations

import enum, logging, threading, time, uuid
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Set

import requests

import config
from fetcher import FetchFailure, fetch_page, new_session
from parser import Document, ExtractedPage, extract_page

logger = logging.getLogger(__name__)

FetchFn = Callable[..., str]            # fetch(url, session=...) -> html


class CrawlState(enum.Enum):
    IDLE = "idle"
    CRAWLING = "crawling"
    COMPLETE = "complete"


@dataclass
class CrawlSession:
    """Isolated state for a single query's crawl."""

    time_budget: float
    max_pages: int
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    visited: Set[str] = field(default_factory=set)
    documents: List[Document] = field(default_factory=list)
    started_at: float = field(default_factory=time.monotonic)
    state: CrawlState = CrawlState.IDLE
    closed: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    # ---------- clock ----------
    @property
    def deadline(self) -> float:
        return self.started_at + self.time_budget

    def remaining(self) -> float:
        return self.deadline - time.monotonic()

    def expired(self) -> bool:
        return self.remaining() <= 0

    @property
    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.started_at) * 1000)

    # ---------- state transitions ----------
    def claim(self, url: str) -> bool:
        """Mark `url` visited if it is new and the page budget allows it."""
        with self._lock:
            if self.closed or url in self.visited or len(self.visited) >= self.max_pages:
                return False
            self.visited.add(url)
            if self.state is CrawlState.IDLE:
                self.state = CrawlState.CRAWLING
            return True

    def admit(self, doc: Document) -> bool:
        with self._lock:
            if self.closed:
                return False
            self.documents.append(doc)
            return True

    def close(self) -> None:
        with self._lock:
            self.closed = True
            self.state = CrawlState.COMPLETE


# ───────────────────────── worker side ───────────────────────────
def _visit(session: CrawlSession, http: requests.Session,
           fetch: FetchFn, url: str) -> Optional[ExtractedPage]:
    if session.closed:
        return None
    try:
        html = fetch(url, session=http)
    except FetchFailure as exc:
        logger.debug("CRAWL-ERROR %s: %s", url[:60], exc.kind.value)
        return None
    if session.closed:                   # arrived after the deadline
        return None
    try:
        return extract_page(url, html)
    except Exception as exc:             # one bad page never ends the crawl
        logger.debug("EXTRACT-ERROR %s: %r", url[:60], exc)
        return None


# ───────────────────────── coordinator ───────────────────────────
def crawl(seeds: Sequence[str], *,
          fetch: FetchFn = fetch_page,
          max_pages: int | None = None,
          depth_limit: int | None = None,
          time_budget: float | None = None,
          seed_fanout: int | None = None,
          workers: int | None = None) -> CrawlSession:
    """
    Crawl outward from `seeds` until the frontier is exhausted or the time
    budget runs out, whichever comes first. Returns the completed session;
    a partial crawl is a normal outcome.
    """
    max_pages   = config.MAX_PAGES if max_pages is None else max_pages
    depth_limit = config.CRAWL_DEPTH_LIMIT if depth_limit is None else depth_limit
    time_budget = config.MAX_CRAWL_TIME if time_budget is None else time_budget
    seed_fanout = config.SEED_FANOUT if seed_fanout is None else seed_fanout
    workers     = config.CRAWL_WORKERS if workers is None else workers

    session = CrawlSession(time_budget=time_budget, max_pages=max_pages)
    http = new_session()
    pool = ThreadPoolExecutor(max_workers=workers,
                              thread_name_prefix=f"crawl-{session.session_id}")
    pending: Dict[Future, int] = {}     # future → depth of the URL it fetches

    def dispatch(url: str, depth: int) -> None:
        if depth > depth_limit or not session.claim(url):
            return
        logger.debug("CRAWL depth %d: %s", depth, url[:60])
        pending[pool.submit(_visit, session, http, fetch, url)] = depth

    try:
        for url in seeds[:seed_fanout]:
            dispatch(url, 0)

        while pending:
            remaining = session.remaining()
            if remaining <= 0:
                break
            done, _ = wait(pending, timeout=remaining, return_when=FIRST_COMPLETED)
            if session.expired():
                break                    # deadline wins ties: drop `done` too
            for fut in done:
                depth = pending.pop(fut)
                page = fut.result()
                if page is None or not session.admit(page.document):
                    continue
                for link in page.links:
                    dispatch(link, depth + 1)
    finally:
        session.close()
        pool.shutdown(wait=False, cancel_futures=True)
        http.close()

    logger.info("CRAWL-COMPLETE %s: %d docs from %d visited in %d ms%s",
                session.session_id, len(session.documents), len(session.visited),
                session.elapsed_ms, " (deadline)" if pending else "")
    return session
