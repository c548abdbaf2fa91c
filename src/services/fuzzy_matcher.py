"""Trigram fuzzy matching of free text against catalog candidates.

The similarity functions follow PostgreSQL's pg_trgm so that ranks line up with
what the catalog search has always returned:

- words are runs of letters/digits, padded as "  word " and cut into trigrams
- similarity(a, b) is the Jaccard index of the two trigram sets
- word_similarity(a, b) is the best Jaccard index between the trigrams of ``a``
  and any contiguous extent of the ordered trigrams of ``b``

The matcher only ranks. Whether a rank is good enough to auto-resolve a mention
is decided by the caller through ``accept``.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Protocol

from src.services.text_normalizer import normalize

WORD_RE = re.compile(r"[^\W_]+")
LETTER_CLASS = r"[^\W\d_]"

SIMILARITY_THRESHOLD = 0.3
WORD_SIMILARITY_THRESHOLD = 0.8
SHORT_NAME_LENGTH = 4
MATCH_ACCEPTANCE_THRESHOLD = 0.5


class Ranked(Protocol):
    rank: float


@dataclass(frozen=True)
class Candidate:
    """A catalog entry that can be matched.

    ``fields`` holds every text form that may match; the first one is the
    display name used for tie-breaking.
    """

    id: Any
    fields: tuple[str, ...]
    is_alias: bool = False
    is_approved: bool = True
    payload: Any = field(default=None, compare=False)

    @property
    def name(self) -> str:
        return self.fields[0] if self.fields else ""


@dataclass(frozen=True)
class FieldScore:
    """Similarity components of a query against one candidate field."""

    similarity: float = 0.0
    word_similarity: float = 0.0
    guard: float = 0.0
    prefix: bool = False

    @property
    def rank(self) -> float:
        return max(self.similarity, self.word_similarity, self.guard)

    @property
    def included(self) -> bool:
        return (
            self.prefix
            or self.similarity > SIMILARITY_THRESHOLD
            or self.word_similarity > WORD_SIMILARITY_THRESHOLD
            or self.guard > WORD_SIMILARITY_THRESHOLD
        )


@dataclass(frozen=True)
class RankedMatch:
    """A candidate with its rank in [0, 1]."""

    candidate: Candidate
    rank: float
    prefix: bool = False


def trigram_list(text: str) -> list[str]:
    """Ordered trigrams of every word in ``text`` (duplicates kept)."""
    result: list[str] = []
    for word in WORD_RE.findall(text):
        padded = f"  {word} "
        result.extend(padded[i : i + 3] for i in range(len(padded) - 2))
    return result


def trigrams(text: str) -> set[str]:
    return set(trigram_list(text))


def similarity(a: str, b: str) -> float:
    """Jaccard index of the trigram sets of ``a`` and ``b``."""
    ta, tb = trigrams(a), trigrams(b)
    if not ta or not tb:
        return 0.0
    shared = len(ta & tb)
    return shared / (len(ta) + len(tb) - shared)


def word_similarity(a: str, b: str) -> float:
    """Best similarity between ``a`` and a contiguous extent of ``b``."""
    target = trigrams(a)
    ordered = trigram_list(b)
    if not target or not ordered:
        return 0.0

    best = 0.0
    for start, first in enumerate(ordered):
        # Extents that begin or end on an unshared trigram never score higher
        if first not in target:
            continue
        extent: set[str] = set()
        shared = 0
        for trigram in ordered[start:]:
            if trigram in extent:
                continue
            extent.add(trigram)
            if trigram not in target:
                continue
            shared += 1
            best = max(best, shared / (len(target) + len(extent) - shared))
            if best == 1.0:
                return best
    return best


def contains_word(needle: str, haystack: str) -> bool:
    """Check whether ``needle`` occurs in ``haystack`` bounded by non-letters.

    "ägg" is a word of "ägg stora" but not of "lägg".
    """
    pattern = rf"(?<!{LETTER_CLASS}){re.escape(needle)}(?!{LETTER_CLASS})"
    return re.search(pattern, haystack) is not None


def score_field(query: str, value: str) -> FieldScore:
    """Score a normalized query against one normalized field."""
    if not query or not value:
        return FieldScore()

    if len(value) >= SHORT_NAME_LENGTH:
        guard = word_similarity(value, query)
    else:
        guard = 1.0 if contains_word(value, query) else 0.0

    return FieldScore(
        similarity=similarity(query, value),
        word_similarity=word_similarity(query, value),
        guard=guard,
        prefix=value.startswith(query),
    )


def score_candidate(query: str, candidate: Candidate) -> RankedMatch | None:
    """Best field score of a candidate, or None if no field qualifies."""
    values = [normalize(value) for value in candidate.fields if value]

    if len(query) == 1:
        # Single characters carry no trigram signal: the name must start with it
        if not normalize(candidate.name).startswith(query):
            return None
        rank = max(similarity(query, value) for value in values)
        return RankedMatch(candidate=candidate, rank=rank, prefix=True)

    best: FieldScore | None = None
    for value in values:
        scored = score_field(query, value)
        if not scored.included:
            continue
        if best is None or scored.rank > best.rank:
            best = scored
    if best is None:
        return None
    return RankedMatch(candidate=candidate, rank=min(best.rank, 1.0), prefix=best.prefix)


def _sort_key(match: RankedMatch) -> tuple:
    candidate = match.candidate
    return (
        -match.rank,
        candidate.is_alias,
        len(candidate.name),
        not candidate.is_approved,
        normalize(candidate.name),
    )


def match(query: str | None, catalog: list[Candidate], limit: int) -> list[RankedMatch]:
    """Rank catalog candidates against a free-text query.

    Returns at most ``limit`` matches, best first. Empty or whitespace queries
    return an empty list.
    """
    normalized = normalize(query)
    if not normalized or limit <= 0:
        return []

    results = []
    for candidate in catalog:
        ranked = score_candidate(normalized, candidate)
        if ranked is not None:
            results.append(ranked)

    results.sort(key=_sort_key)
    return results[:limit]


def accept(ranked: Ranked | None, threshold: float = MATCH_ACCEPTANCE_THRESHOLD) -> bool:
    """Check whether a match is strong enough to auto-resolve a mention."""
    return ranked is not None and ranked.rank > threshold
