"""
Deterministic text matching against provider catalogs.

Key components:
- DeterministicMatcher: ranks materials for a query, with a rationale trace
- SearchEngine: autocomplete hits plus "did you mean" suggestions
- tokenizer / scorer: normalization and tiered similarity scoring
"""
from .tokenizer import normalize, tokenize
from .scorer import ScoredMatch, PreparedQuery, score_material
from .matcher import DeterministicMatcher, MatchOutcome, MIN_ACCEPTANCE_SCORE
from .search_engine import SearchEngine, SearchResponse, edit_distance, suggest_names

__all__ = [
    "normalize",
    "tokenize",
    "ScoredMatch",
    "PreparedQuery",
    "score_material",
    "DeterministicMatcher",
    "MatchOutcome",
    "MIN_ACCEPTANCE_SCORE",
    "SearchEngine",
    "SearchResponse",
    "edit_distance",
    "suggest_names",
]
