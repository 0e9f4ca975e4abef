"""
Deterministic matcher: ranks every material of a provider against a query.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..models import Material, MatchResult, Provider
from .scorer import PreparedQuery, ScoredMatch, score_material

logger = logging.getLogger(__name__)

# Materials scoring below this are not ranked at all
MIN_ACCEPTANCE_SCORE = 0.15
LOW_CONFIDENCE_NOTICE = 0.5


@dataclass
class MatchOutcome:
    """
    Result of matching one query against a catalog.

    Attributes:
        best: Top material when it clears the acceptance floor, else None
        matches: Ranked candidates, score-descending, unique material ids
        confidence: Score of `best` (0.0 when there is none)
        rationale: Human-readable trace of the decision
        query: The query string that produced this outcome
    """
    best: Optional[Material]
    matches: List[MatchResult]
    confidence: float
    rationale: List[str] = field(default_factory=list)
    query: str = ""


class DeterministicMatcher:
    """
    Text matcher over a provider's materials.

    Pure and stateless apart from its thresholds, so one instance is shared
    across all requests.
    """

    def __init__(
        self,
        min_score: float = MIN_ACCEPTANCE_SCORE,
        max_matches: int = 5,
    ):
        """
        :param min_score: Acceptance floor for ranking a material
        :param max_matches: Number of ranked matches kept in an outcome
        """
        if not 0.0 <= min_score <= 1.0:
            raise ValueError(f"min_score must be between 0.0 and 1.0, got {min_score}")
        if max_matches < 1:
            raise ValueError(f"max_matches must be positive, got {max_matches}")

        self.min_score = min_score
        self.max_matches = max_matches

    def rank(self, provider: Provider, query: str) -> List[ScoredMatch]:
        """
        Score every material and return the acceptable ones, best first.

        Ties keep exact display-name hits ahead of other tiers, then
        catalog declaration order.
        """
        prepared = PreparedQuery.from_text(query)
        if not prepared.text:
            return []

        scored = [
            (index, score_material(material, prepared))
            for index, material in enumerate(provider.materials)
        ]
        accepted = [(i, s) for i, s in scored if s.score > 0 and s.score >= self.min_score]
        accepted.sort(key=lambda item: (-item[1].score, not item[1].exact_name, item[0]))
        return [s for _, s in accepted]

    def match(self, provider: Provider, query: str) -> MatchOutcome:
        """
        Match a single free-text query.

        :param provider: Catalog to search
        :param query: Item description
        :return: MatchOutcome with best, ranked matches, confidence and rationale
        """
        trimmed = (query or "").strip()
        if not trimmed:
            return MatchOutcome(
                best=None,
                matches=[],
                confidence=0.0,
                rationale=["Empty query provided"],
                query="",
            )

        ranked = self.rank(provider, trimmed)
        if not ranked:
            return MatchOutcome(
                best=None,
                matches=[],
                confidence=0.0,
                rationale=[
                    f'No materials matched "{trimmed}" in {provider.display_name}',
                    "Try a different search term or check spelling",
                ],
                query=trimmed,
            )

        top = ranked[0]
        rationale = [f"Best match: {top.describe()}"]
        if len(ranked) > 1:
            extra = len(ranked) - 1
            rationale.append(f"{extra} additional match{'es' if extra > 1 else ''} found")
        if top.score < LOW_CONFIDENCE_NOTICE:
            rationale.append("Low confidence. Consider refining your search.")

        return MatchOutcome(
            best=top.material,
            matches=[
                MatchResult(material=s.material, score=s.score)
                for s in ranked[: self.max_matches]
            ],
            confidence=top.score,
            rationale=rationale,
            query=trimmed,
        )

    def match_best(self, provider: Provider, queries: Iterable[str]) -> MatchOutcome:
        """
        Match several candidate strings and keep the most confident outcome.

        Scores are not merged across candidates; on equal confidence the
        earlier candidate wins.
        """
        candidates = [q.strip() for q in queries if q and q.strip()]
        if not candidates:
            return self.match(provider, "")

        best_outcome = self.match(provider, candidates[0])
        for candidate in candidates[1:]:
            outcome = self.match(provider, candidate)
            if outcome.confidence > best_outcome.confidence:
                best_outcome = outcome

        logger.debug(
            f"Deterministic match over {len(candidates)} candidates: "
            f"query={best_outcome.query!r}, confidence={best_outcome.confidence}"
        )
        return best_outcome
