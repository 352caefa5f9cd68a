#fetcher.py
from __future__ import annotations
import enum, logging, random, time

import requests

import config

logger = logging.getLogger(__name__)

_UA_POOL = [
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_5) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 Safari/605.1.15",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64; rv:125.0) Gecko/20100101 Firefox/125.0",
]
_HTML_TYPES = ("text/html", "application/xhtml+xml")


class FailureKind(enum.Enum):
    TIMEOUT = "timeout"
    NETWORK_ERROR = "network_error"
    NON_SUCCESS_STATUS = "non_success_status"
    NOT_HTML = "not_html"


class FetchFailure(Exception):
    """A single URL yielded nothing usable; never fatal to a crawl."""

    def __init__(self, url: str, kind: FailureKind, detail: str = "") -> None:
        super().__init__(f"{kind.value}: {url} {detail}".rstrip())
        self.url = url
        self.kind = kind
        self.detail = detail


def _ua() -> str:
    return random.choice(_UA_POOL)

def _is_html(resp: requests.Response) -> bool:
    ct = resp.headers.get("content-type", "")
    return any(t in ct for t in _HTML_TYPES)

def new_session(max_redirects: int | None = None) -> requests.Session:
    """requests.Session with the redirect cap applied (one per crawl)."""
    s = requests.Session()
    s.max_redirects = config.MAX_REDIRECTS if max_redirects is None else max_redirects
    return s

def _get_once(session: requests.Session, url: str, timeout: float) -> str:
    try:
        r = session.get(url, headers={"User-Agent": _ua()}, timeout=timeout)
    except requests.Timeout as exc:
        raise FetchFailure(url, FailureKind.TIMEOUT, str(exc)) from exc
    except requests.RequestException as exc:     # incl. TooManyRedirects
        raise FetchFailure(url, FailureKind.NETWORK_ERROR, str(exc)) from exc

    if not 200 <= r.status_code < 300:
        raise FetchFailure(url, FailureKind.NON_SUCCESS_STATUS, str(r.status_code))
    if not _is_html(r):
        raise FetchFailure(url, FailureKind.NOT_HTML, r.headers.get("content-type", ""))
    return r.text

def fetch_page(url: str,
               session: requests.Session | None = None,
               timeout: float | None = None,
               retries: int = 0) -> str:
    """
    GET `url` and return its HTML. Raises FetchFailure on timeout, network
    error, non-2xx status or a non-HTML body. Retries only timeouts and
    network errors.
    """
    timeout = config.FETCH_TIMEOUT if timeout is None else timeout
    own_session = session is None
    session = session or new_session()
    try:
        attempt = 0
        while True:
            attempt += 1
            logger.debug("FETCH %s  (try %d)", url, attempt)
            try:
                return _get_once(session, url, timeout)
            except FetchFailure as exc:
                logger.debug("  ↳ error: %s", exc)
                retryable = exc.kind in (FailureKind.TIMEOUT, FailureKind.NETWORK_ERROR)
                if not retryable or attempt > retries:
                    raise
                time.sleep(0.5 * attempt)
    finally:
        if own_session:
            session.close()
