# seeds.py — query → starting URLs for the per-query crawl
"""
Heuristic seed selection. Matching is deliberately loose: a wrong seed only
changes where the crawl starts, it never filters results.
"""
from __future__ import annotations
from typing import Dict, List

MAX_SEEDS      = 6
MIN_TOPIC_HITS = 2          # below this, mix in DEFAULT_SEEDS
MIN_WORD_LEN   = 4          # query words must be longer than 3 chars

# ─────────────────────────── topic table ──────────────────────────
TOPIC_SEEDS: Dict[str, List[str]] = {
    "javascript": ["https://developer.mozilla.org/en-US/docs/Web/JavaScript",
                   "https://javascript.info/",
                   "https://stackoverflow.com/questions/tagged/javascript",
                   "https://www.typescriptlang.org/"],
    "python":     ["https://www.python.org/",
                   "https://docs.python.org/",
                   "https://realpython.com/",
                   "https://www.python.org/community/"],
    "react":      ["https://react.dev/",
                   "https://stackoverflow.com/questions/tagged/reactjs",
                   "https://github.com/facebook/react",
                   "https://nextjs.org/"],
    "nodejs":     ["https://nodejs.org/",
                   "https://nodejs.org/docs/",
                   "https://stackoverflow.com/questions/tagged/node.js",
                   "https://expressjs.com/"],
    "ai":         ["https://openai.com/",
                   "https://en.wikipedia.org/wiki/Artificial_intelligence",
                   "https://huggingface.co/",
                   "https://www.anthropic.com/"],
    "web":        ["https://developer.mozilla.org/",
                   "https://www.w3.org/",
                   "https://stackoverflow.com/questions/tagged/html",
                   "https://css-tricks.com/"],
    "database":   ["https://www.postgresql.org/",
                   "https://www.mongodb.com/",
                   "https://stackoverflow.com/questions/tagged/sql",
                   "https://firebase.google.com/"],
    "api":        ["https://developer.mozilla.org/en-US/docs/Web/API",
                   "https://restfulapi.net/",
                   "https://swagger.io/",
                   "https://graphql.org/"],
    "cloud":      ["https://aws.amazon.com/",
                   "https://cloud.google.com/",
                   "https://azure.microsoft.com/",
                   "https://www.digitalocean.com/"],
    "devops":     ["https://www.docker.com/",
                   "https://kubernetes.io/",
                   "https://www.jenkins.io/",
                   "https://www.terraform.io/"],
    "ml":         ["https://www.tensorflow.org/",
                   "https://pytorch.org/",
                   "https://scikit-learn.org/",
                   "https://www.fast.ai/"],
    "security":   ["https://owasp.org/",
                   "https://cwe.mitre.org/",
                   "https://cheatsheetseries.owasp.org/",
                   "https://portswigger.net/"],
    "news":       ["https://news.ycombinator.com/",
                   "https://techcrunch.com/",
                   "https://theverge.com/",
                   "https://arstechnica.com/"],
    "roblox":     ["https://www.roblox.com/",
                   "https://create.roblox.com/",
                   "https://developer.roblox.com/",
                   "https://www.roblox.com/docs/"],
    "game":       ["https://unity.com/",
                   "https://www.unrealengine.com/",
                   "https://godotengine.org/",
                   "https://www.cryengine.com/"],
}

DEFAULT_SEEDS: List[str] = [
    "https://en.wikipedia.org/",
    "https://developer.mozilla.org/",
    "https://stackoverflow.com/",
    "https://github.com/",
    "https://medium.com/",
]
# ──────────────────────────────────────────────────────────────────

def _topic_matches(topic: str, words: List[str]) -> bool:
    # substring either way round; the reverse direction only checks the
    # topic's first letter, so it is very permissive
    return any(w in topic or topic[0] in w for w in words)

def generate_seeds(query: str, limit: int = MAX_SEEDS) -> List[str]:
    """Ordered, de-duplicated seed URLs for `query` (≤ `limit`)."""
    words = [w for w in query.lower().split() if len(w) >= MIN_WORD_LEN]
    seeds: Dict[str, None] = {}          # insertion-ordered set

    for topic, urls in TOPIC_SEEDS.items():
        if _topic_matches(topic, words):
            seeds.update(dict.fromkeys(urls))

    if len(seeds) < MIN_TOPIC_HITS:
        seeds.update(dict.fromkeys(DEFAULT_SEEDS))

    return list(seeds)[:limit]
