# rag.py — per-query inverted index + BM25 ranking

import math
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from parser import Document
from utils import make_snippet, tokenize

K1 = 1.5        # term-frequency saturation
B  = 0.75       # length normalisation

InvertedIndex = Dict[str, Dict[int, int]]      # term → doc_id → tf
DocumentFrequency = Dict[str, int]             # term → #docs containing it


@dataclass(frozen=True)
class RankedResult:
    title: str
    url: str
    snippet: str
    score: float

    def public(self) -> Dict[str, str]:
        return {"title": self.title, "url": self.url, "snippet": self.snippet}


def build_index(documents: Sequence[Document]) -> Tuple[InvertedIndex, DocumentFrequency]:
    """doc_id is the document's position in `documents` (crawl order)."""
    index: InvertedIndex = defaultdict(dict)
    doc_freq: DocumentFrequency = Counter()
    for doc_id, doc in enumerate(documents):
        # title counted twice: it is the strongest relevance signal we have
        counts = Counter(tokenize(f"{doc.title} {doc.title} {doc.content}"))
        for term, tf in counts.items():
            index[term][doc_id] = tf
            doc_freq[term] += 1
    return dict(index), dict(doc_freq)


def bm25_term_score(tf: int, idf: float, doc_len: int, avg_len: float,
                    k1: float = K1, b: float = B) -> float:
    norm = doc_len / avg_len
    return idf * (tf * (k1 + 1)) / (tf + k1 * (1 - b + b * norm))


def rank(documents: Sequence[Document], index: InvertedIndex,
         doc_freq: DocumentFrequency, query: str) -> Dict[int, float]:
    """Accumulated BM25 score per doc_id, for docs matching ≥1 query term."""
    n_docs = max(len(documents), 1)
    avg_len = max(sum(len(d.content) for d in documents) / n_docs, 1)
    scores: Dict[int, float] = defaultdict(float)

    for token in tokenize(query):
        postings = index.get(token)
        if not postings:
            continue
        idf = math.log(n_docs / doc_freq.get(token, 1))
        for doc_id, tf in postings.items():
            scores[doc_id] += bm25_term_score(
                tf, idf, len(documents[doc_id].content), avg_len)
    return dict(scores)


def top_results(documents: Sequence[Document], scores: Dict[int, float],
                limit: int) -> List[RankedResult]:
    # equal scores keep crawl order
    order = sorted(scores.items(), key=lambda kv: (-kv[1], kv[0]))[:limit]
    return [
        RankedResult(title=documents[i].title,
                     url=documents[i].url,
                     snippet=make_snippet(documents[i].content),
                     score=s)
        for i, s in order
    ]
