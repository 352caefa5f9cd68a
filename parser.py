#parser.py
from __future__ import annotations
import logging, re, time
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

import config

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")
_BOILERPLATE_TAGS = ["script", "style", "noscript", "nav", "header", "footer", "aside"]
_BOILERPLATE_CLASSES = ("ad", "ads", "advert", "sidebar", "nav")
_MAIN_SELECTORS = ("main", "article", "[role=main]", ".content", ".post", ".article-body")


@dataclass(frozen=True)
class Document:
    url: str
    title: str
    content: str
    fetched_at: float = field(default_factory=time.time)


class ExtractedPage(NamedTuple):
    document: Document
    links: List[str]


def _collapse(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()

def _title(soup: BeautifulSoup) -> str:
    for tag in (soup.title, soup.find("h1")):
        if tag is not None:
            text = _collapse(tag.get_text(" "))
            if text:
                return text
    return "Untitled"

def _strip_boilerplate(soup: BeautifulSoup) -> None:
    doomed = soup(_BOILERPLATE_TAGS)
    doomed += soup.find_all(class_=lambda c: c in _BOILERPLATE_CLASSES)
    for tag in doomed:
        if not tag.decomposed:          # already gone with an ancestor
            tag.decompose()

def _main_region(soup: BeautifulSoup):
    for sel in _MAIN_SELECTORS:
        node = soup.select_one(sel)
        if node is not None:
            return node
    return soup.body or soup

def extract_links(base_url: str, soup: BeautifulSoup,
                  limit: int | None = None) -> List[str]:
    """Same-host, fragment-free links in document order (≤ `limit`)."""
    limit = config.MAX_LINKS_PER_PAGE if limit is None else limit
    host = urlparse(base_url).hostname
    base = base_url.split("#")[0]
    links: List[str] = []
    for a in soup.find_all("a", href=True):
        if len(links) >= limit:
            break
        href = a["href"].strip()
        if not href or href.startswith("#"):
            continue
        try:
            full = urljoin(base_url, href).split("#")[0]
            parsed = urlparse(full)
            link_host = parsed.hostname
        except ValueError:                                 # e.g. "http://[oops"
            continue
        if parsed.scheme not in ("http", "https") or link_host != host:
            continue                                       # stay on-site
        if full == base or full in links:
            continue
        links.append(full)
    return links

def extract_page(url: str, html: str) -> Optional[ExtractedPage]:
    """
    Normalise a fetched page into a Document plus next-hop links.
    Returns None when the page has too little text to be worth indexing.
    """
    if not html:
        return None
    soup = BeautifulSoup(html, "html.parser")
    title = _title(soup)                   # before <header>/<h1> get stripped
    _strip_boilerplate(soup)

    content = _collapse(_main_region(soup).get_text(" "))[:config.MAX_CONTENT_CHARS]
    if len(content) < config.MIN_CONTENT_CHARS:
        logger.debug("REJECT %s (%d chars)", url, len(content))
        return None

    doc = Document(url=url, title=title, content=content)
    return ExtractedPage(doc, extract_links(url, soup))
