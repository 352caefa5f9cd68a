from __future__ import annotations

import threading
import time
from collections import Counter
from typing import Dict, Iterable, Optional

import pytest

from fetcher import FailureKind, FetchFailure

FILLER = (
    "This paragraph exists so the extractor sees enough running text to keep "
    "the document instead of rejecting it as a thin navigation stub."
)


def make_html(title: str, body: str = FILLER, links: Iterable[str] = (),
              h1: Optional[str] = None) -> str:
    anchors = "".join(f'<a href="{href}">link</a>' for href in links)
    title_tag = f"<title>{title}</title>" if title else ""
    heading = f"<h1>{h1}</h1>" if h1 else ""
    return (f"<html><head>{title_tag}</head><body>"
            f"<nav>Home About Contact</nav>{heading}"
            f"<main><p>{body}</p>{anchors}</main>"
            f"<footer>Copyright footer text</footer></body></html>")


class FakeWeb:
    """Stands in for fetcher.fetch_page: url → html, with call counting."""

    def __init__(self, pages: Dict[str, str] | None = None,
                 delays: Dict[str, float] | None = None) -> None:
        self.pages = dict(pages or {})
        self.delays = dict(delays or {})
        self.calls: Counter = Counter()
        self._lock = threading.Lock()

    def __call__(self, url: str, session=None) -> str:
        with self._lock:
            self.calls[url] += 1
        if url in self.delays:
            time.sleep(self.delays[url])
        if url not in self.pages:
            raise FetchFailure(url, FailureKind.NETWORK_ERROR, "unreachable")
        return self.pages[url]

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_web():
    return FakeWeb()


@pytest.fixture
def clock():
    return FakeClock()
