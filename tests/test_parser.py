from bs4 import BeautifulSoup

from conftest import FILLER, make_html
from parser import extract_links, extract_page

URL = "https://docs.example.com/guide/intro"


def test_title_prefers_title_tag():
    page = extract_page(URL, make_html("Intro | Docs", h1="Heading"))
    assert page.document.title == "Intro | Docs"


def test_title_falls_back_to_first_heading_then_untitled():
    assert extract_page(URL, make_html("", h1="Getting  started")).document.title == "Getting started"
    assert extract_page(URL, make_html("")).document.title == "Untitled"


def test_boilerplate_is_stripped():
    html = ("<html><head><title>T</title><style>.x{color:red}</style></head><body>"
            "<nav>Menu<div class='ad'>Nested <script>var n = 1;</script></div></nav>"
            "<div class='sidebar'>Related junk</div>"
            "<div class='ad'>Buy now</div><script>var tracking = 1;</script>"
            f"<p>{FILLER}</p><footer>Footer links</footer></body></html>")
    content = extract_page(URL, html).document.content
    for junk in ("Menu", "Nested", "Related junk", "Buy now", "tracking", "Footer", "color:red"):
        assert junk not in content
    assert content == FILLER


def test_main_region_wins_over_rest_of_body():
    html = (f"<html><body><div>Outside the article {FILLER}</div>"
            f"<article>Inside {FILLER}</article></body></html>")
    content = extract_page(URL, html).document.content
    assert content.startswith("Inside")
    assert "Outside" not in content


def test_whitespace_is_collapsed():
    html = f"<html><body><main>  lots\n\n of\t   space  {FILLER}</main></body></html>"
    assert extract_page(URL, html).document.content.startswith("lots of space ")


def test_thin_pages_are_rejected():
    assert extract_page(URL, make_html("T", body="Too short.")) is None
    assert extract_page(URL, "") is None


def test_content_is_capped():
    doc = extract_page(URL, make_html("T", body="word " * 3000)).document
    assert len(doc.content) == 5000
    assert doc.url == URL
    assert doc.fetched_at > 0


def test_links_stay_on_host_and_drop_fragments():
    hrefs = [
        "#top",                                   # fragment only
        "/guide/setup#install",                   # fragment stripped
        "https://other.example.com/x",            # other host
        "https://sub.docs.example.com/y",         # subdomain is another host
        "mailto:team@docs.example.com",
        "javascript:void(0)",
        "intro",                                  # resolves to the page itself
        "/guide/setup",                           # duplicate after stripping
        "https://docs.example.com/api",
    ]
    page = extract_page(URL, make_html("T", links=hrefs))
    assert page.links == [
        "https://docs.example.com/guide/setup",
        "https://docs.example.com/api",
    ]


def test_links_are_capped_at_five():
    soup = BeautifulSoup(make_html("T", links=[f"/p{i}" for i in range(12)]), "html.parser")
    links = extract_links(URL, soup)
    assert links == [f"https://docs.example.com/p{i}" for i in range(5)]


def test_malformed_href_is_skipped():
    page = extract_page(URL, make_html("T", links=["http://[oops", "/guide/next"]))
    assert page is not None
    assert page.links == ["https://docs.example.com/guide/next"]
