# main.py — bubble-search CLI
import json, logging

import click

import config
from crawler import crawl as crawl_session
from engine import SearchEngine, source_from_config
from utils import clamp_limit, format_search_results


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

@click.group()
def cli() -> None:
    """Bubble Search: per-query micro-crawl + BM25 ranking."""
    pass

@cli.command()
@click.argument("query", nargs=-1, required=True)
@click.option("-n", "--limit", default=config.DEFAULT_LIMIT, show_default=True,
              help="Max results (clamped to BUBBLE_MAX_LIMIT).")
@click.option("--source", default=config.RESULT_SOURCE, show_default=True,
              type=click.Choice(["crawl", "duckduckgo"]), help="Where results come from.")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Log every fetch.")
def search(query: tuple[str, ...], limit: int, source: str,
           as_json: bool, verbose: bool) -> None:
    """Run one search and print the ranked hits."""
    _configure_logging(verbose)
    engine = SearchEngine(source=source_from_config(source))
    results = engine.search(" ".join(query), clamp_limit(limit))
    if as_json:
        click.echo(json.dumps(results, indent=2, ensure_ascii=False))
    else:
        click.echo(format_search_results(results))

@cli.command()
@click.argument("seeds", nargs=-1, required=True)
@click.option("--pages", default=config.MAX_PAGES, show_default=True, help="Max pages to visit")
@click.option("--budget", default=config.MAX_CRAWL_TIME, show_default=True,
              help="Wall-clock budget in seconds")
@click.option("-v", "--verbose", is_flag=True)
def crawl(seeds: tuple[str, ...], pages: int, budget: float, verbose: bool) -> None:
    """
    Run a single crawl session from explicit seed URLs and list what it kept.
    """
    _configure_logging(verbose)
    session = crawl_session(list(seeds), max_pages=pages, time_budget=budget,
                            seed_fanout=len(seeds))
    for doc in session.documents:
        click.echo(f"{doc.url}\n   {doc.title}  ({len(doc.content)} chars)")
    click.echo(click.style(
        f"✓ Kept {len(session.documents)} of {len(session.visited)} pages "
        f"in {session.elapsed_ms} ms.", fg="green"))

@cli.command()
@click.option("--host", default=config.HOST, show_default=True)
@click.option("--port", default=config.PORT, show_default=True)
@click.option("-v", "--verbose", is_flag=True)
def serve(host: str, port: int, verbose: bool) -> None:
    """Serve the JSON search API (Flask dev server)."""
    from server import create_app
    _configure_logging(verbose)
    create_app().run(host=host, port=port)

if __name__ == "__main__":
    cli()
