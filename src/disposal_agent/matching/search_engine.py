"""
Autocomplete search with "did you mean" suggestions.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from rapidfuzz.distance import Levenshtein

from ..models import MatchResult, Provider
from .matcher import DeterministicMatcher

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3
SUGGESTION_MIN_DISTANCE_BUDGET = 2
SUGGESTION_LENGTH_RATIO = 0.4


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit cost insert, delete and substitute."""
    return Levenshtein.distance(a, b)


def suggestion_budget(query: str) -> int:
    """Largest edit distance still offered as a suggestion for this query."""
    return max(SUGGESTION_MIN_DISTANCE_BUDGET, int(len(query) * SUGGESTION_LENGTH_RATIO))


def suggest_names(provider: Provider, query: str, limit: int = MAX_SUGGESTIONS) -> List[str]:
    """
    Closest material display names by edit distance.

    A name qualifies when 0 < distance <= max(2, floor(len(query) * 0.4)).
    Closest first; ties keep catalog order.
    """
    needle = query.strip().lower()
    if not needle:
        return []

    budget = suggestion_budget(needle)
    candidates = []
    for index, material in enumerate(provider.materials):
        distance = edit_distance(needle, material.name.lower())
        if 0 < distance <= budget:
            candidates.append((distance, index, material.name))

    candidates.sort(key=lambda c: (c[0], c[1]))

    names: List[str] = []
    for _, _, name in candidates:
        if name not in names:
            names.append(name)
        if len(names) >= limit:
            break
    return names


@dataclass
class SearchResponse:
    """Search hits, or suggestions when nothing matched."""
    results: List[MatchResult]
    suggestions: List[str] = field(default_factory=list)

    def to_payload(self) -> Union[List[Dict[str, Any]], Dict[str, Any]]:
        """Wire format: a list of hits, or {results: [], suggestions} when empty."""
        hits = [
            {
                "materialId": r.material.id,
                "name": r.material.name,
                "category": r.material.category.value,
                "score": r.score,
            }
            for r in self.results
        ]
        if hits:
            return hits
        return {"results": [], "suggestions": list(self.suggestions)}


class SearchEngine:
    """
    Incremental search over a provider catalog.

    Reuses the deterministic matcher's scoring and ordering; only the
    number of returned hits differs.
    """

    def __init__(self, matcher: DeterministicMatcher, default_limit: int = 8):
        self._matcher = matcher
        self.default_limit = default_limit

    def search(self, provider: Provider, query: str, limit: int = None) -> List[MatchResult]:
        """
        Top `limit` materials for the query, score-descending.

        :param provider: Catalog to search
        :param query: Partial or complete item text
        :param limit: Maximum hits (defaults to the engine's default)
        """
        if limit is None:
            limit = self.default_limit
        if limit < 1 or not query or not query.strip():
            return []

        ranked = self._matcher.rank(provider, query.strip())
        return [MatchResult(material=s.material, score=s.score) for s in ranked[:limit]]

    def search_with_suggestions(
        self,
        provider: Provider,
        query: str,
        limit: int = None,
    ) -> SearchResponse:
        """Search, falling back to edit-distance suggestions on an empty result."""
        if not query or not query.strip():
            return SearchResponse(results=[])

        results = self.search(provider, query, limit)
        if results:
            return SearchResponse(results=results)

        suggestions = suggest_names(provider, query)
        logger.info(
            f"Search '{query.strip()}' in {provider.id}: no matches, "
            f"{len(suggestions)} suggestions"
        )
        return SearchResponse(results=[], suggestions=suggestions)
