import time

from conftest import FakeWeb, make_html
from crawler import CrawlSession, CrawlState, crawl
from parser import Document

A = "https://a.example/"
B = "https://b.example/"


def chain(host: str, length: int) -> dict:
    """host/0 → host/1 → … each page linking to the next."""
    pages = {}
    for i in range(length):
        nxt = [f"{host}{i + 1}"] if i + 1 < length else []
        pages[f"{host}{i}"] = make_html(f"page {i}", links=nxt)
    return pages


def test_follows_links_and_collects_documents():
    web = FakeWeb({
        A: make_html("root", links=["/one", "/two"]),
        A + "one": make_html("one"),
        A + "two": make_html("two"),
    })
    session = crawl([A], fetch=web, time_budget=5)
    assert {d.url for d in session.documents} == {A, A + "one", A + "two"}
    assert session.state is CrawlState.COMPLETE
    assert session.closed


def test_depth_limit_stops_descent():
    web = FakeWeb(chain(A, 6))
    session = crawl([A + "0"], fetch=web, depth_limit=2, time_budget=5)
    assert session.visited == {A + "0", A + "1", A + "2"}
    assert web.calls[A + "3"] == 0


def test_page_budget_caps_visited_set():
    hub_links = [f"/p{i}" for i in range(5)]
    pages = {A: make_html("hub", links=hub_links)}
    for i in range(5):
        pages[f"{A}p{i}"] = make_html(f"p{i}", links=[f"/p{i}/{j}" for j in range(5)])
    web = FakeWeb(pages)
    session = crawl([A], fetch=web, max_pages=4, time_budget=5)
    assert len(session.visited) <= 4
    assert web.total_calls == len(session.visited)


def test_no_url_is_fetched_twice():
    web = FakeWeb({
        A: make_html("a", links=["/x", "/y"]),
        A + "x": make_html("x", links=["/", "/y"]),
        A + "y": make_html("y", links=["/", "/x"]),
    })
    crawl([A, A], fetch=web, time_budget=5)
    assert web.calls and max(web.calls.values()) == 1


def test_failed_and_thin_pages_do_not_stop_siblings():
    web = FakeWeb({
        B: make_html("thin", body="short"),
        "https://c.example/": make_html("good"),
    })
    session = crawl(["https://down.example/", B, "https://c.example/"],
                    fetch=web, time_budget=5)
    assert [d.url for d in session.documents] == ["https://c.example/"]
    assert len(session.visited) == 3


def test_only_first_seeds_are_dispatched():
    seeds = [f"https://s{i}.example/" for i in range(6)]
    web = FakeWeb({s: make_html(s) for s in seeds})
    session = crawl(seeds, fetch=web, seed_fanout=4, time_budget=5)
    assert session.visited == set(seeds[:4])


def test_deadline_returns_partial_crawl_and_drops_late_pages():
    web = FakeWeb({A: make_html("fast"), B: make_html("slow")}, delays={B: 1.0})
    t0 = time.monotonic()
    session = crawl([A, B], fetch=web, time_budget=0.3)
    assert time.monotonic() - t0 < 0.9
    assert [d.url for d in session.documents] == [A]

    time.sleep(0.9)                      # let the slow fetch finish
    assert [d.url for d in session.documents] == [A]


def test_sessions_are_isolated():
    web = FakeWeb({A: make_html("a")})
    first = crawl([A], fetch=web, time_budget=5)
    second = crawl([A], fetch=web, time_budget=5)
    assert first.session_id != second.session_id
    assert first.visited == second.visited == {A}
    assert web.calls[A] == 2


def test_closed_session_rejects_mutation():
    session = CrawlSession(time_budget=1, max_pages=3)
    assert session.state is CrawlState.IDLE
    assert session.claim(A)
    assert session.state is CrawlState.CRAWLING
    assert not session.claim(A)

    session.close()
    assert not session.claim(B)
    assert not session.admit(Document(url=A, title="t", content="c"))
    assert session.documents == []


def test_empty_seed_list_completes_immediately():
    session = crawl([], fetch=FakeWeb(), time_budget=5)
    assert session.documents == []
    assert session.state is CrawlState.COMPLETE


def test_malformed_link_does_not_end_the_crawl():
    web = FakeWeb({
        A: make_html("bad links", links=["http://[oops", "/ok"]),
        A + "ok": make_html("ok"),
        B: make_html("healthy"),
    })
    session = crawl([A, B], fetch=web, time_budget=5)
    assert {d.url for d in session.documents} == {A, A + "ok", B}


def test_extraction_error_drops_only_that_page(monkeypatch):
    import crawler as crawler_mod
    real_extract = crawler_mod.extract_page

    def flaky_extract(url, html):
        if url == A:
            raise RuntimeError("parser blew up")
        return real_extract(url, html)

    monkeypatch.setattr(crawler_mod, "extract_page", flaky_extract)
    web = FakeWeb({A: make_html("a"), B: make_html("b")})
    session = crawl([A, B], fetch=web, time_budget=5)
    assert [d.url for d in session.documents] == [B]
    assert session.visited == {A, B}
