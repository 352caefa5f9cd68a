# server.py — thin JSON adapter over SearchEngine
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from flask import Flask, jsonify, render_template_string, request

import config
from engine import SearchEngine
from utils import clamp_limit

logger = logging.getLogger(__name__)

INDEX_HTML = """
<!doctype html>
<title>Bubble Search</title>
<h1>Bubble Search</h1>
<form action="/api/search" method="get">
  <input name="query" placeholder="Search..." size=50 autofocus>
  <input name="limit" size=3 value="{{ default_limit }}">
  <input type="submit" value="Search">
</form>
"""


def _params() -> Dict[str, Any]:
    """query/limit from the query string, a JSON body, or form data."""
    body = request.get_json(silent=True) if request.is_json else None
    params: Dict[str, Any] = dict(body) if isinstance(body, dict) else {}
    for source in (request.form, request.args):
        for key in ("query", "limit"):
            if source.get(key) not in (None, ""):
                params[key] = source.get(key)
    return params


def _failure(message: str, status: int):
    return jsonify(success=False, error=message, results=[]), status


def create_app(engine: Optional[SearchEngine] = None) -> Flask:
    app = Flask(__name__)
    engine = engine or SearchEngine()
    app.config["SEARCH_ENGINE"] = engine

    @app.after_request
    def _cors(resp):
        resp.headers["Access-Control-Allow-Origin"] = "*"
        resp.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        resp.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return resp

    @app.route("/")
    def index():
        return render_template_string(INDEX_HTML, default_limit=config.DEFAULT_LIMIT)

    @app.route("/health")
    def health():
        return jsonify(status="ok")

    @app.route("/api/search", methods=["GET", "POST", "OPTIONS"])
    def api_search():
        if request.method == "OPTIONS":
            return "", 200
        try:
            params = _params()
            query = params.get("query")
            if not isinstance(query, str) or not query.strip():
                return _failure("Query parameter required", 400)
            limit = clamp_limit(params.get("limit"))

            results = engine.search(query, limit)
            resp = jsonify(
                success=True,
                query=query,
                results=results,
                count=len(results),
                timestamp=datetime.now(timezone.utc).isoformat(),
            )
            resp.headers["Cache-Control"] = "s-maxage=60, stale-while-revalidate=300"
            return resp, 200
        except Exception:
            logger.exception("search handler failed")
            return _failure("Search failed", 500)

    return app
