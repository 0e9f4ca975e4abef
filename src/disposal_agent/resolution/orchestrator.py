"""
Resolution orchestrator.

Per request:
    DeterministicMatch → (optional) GenerativeResolve → Blend → Decide

Only the generative step suspends; every other step is a pure computation
over the in-memory catalog.
"""
import logging
from typing import List, Optional

from ..matching import DeterministicMatcher, MatchOutcome
from ..models import MatchResult, Provider
from ..schemas import ResolutionResponse
from ..security import InputValidator
from .confidence import (
    GENERATIVE_TRIGGER_THRESHOLD,
    blend_confidence,
    is_unknown,
)
from .generative_resolver import GenerativeResolver, ResolveFailure, ResolveSuccess
from .validation import ValidatedResolution, validate_resolution

logger = logging.getLogger(__name__)

LOCAL_MATCH_NOTICE = 0.7
# Deterministic input to the blend once a generative match is adopted
GENERATIVE_DETERMINISTIC_FLOOR = 0.3
DEFAULT_SETUP_HINT = "Set OPENAI_API_KEY for smarter item recognition"


def merge_matches(
    resolution: ValidatedResolution,
    previous: List[MatchResult],
    limit: int,
) -> List[MatchResult]:
    """
    Generative best and alternatives ahead of earlier matches.

    Later duplicates of a material id are dropped and the list is re-sorted
    by score (stable, so ties keep the generative entries first).
    """
    merged: List[MatchResult] = []
    seen = set()
    for match in resolution.as_matches() + list(previous):
        if match.material.id in seen:
            continue
        seen.add(match.material.id)
        merged.append(match)

    merged.sort(key=lambda m: -m.score)
    return merged[:limit]


class ResolutionOrchestrator:
    """
    Sequences matcher, generative resolver and blender into one decision.

    Usage:
        orchestrator = ResolutionOrchestrator(matcher, resolver=None)
        response = await orchestrator.resolve(provider, "soda can", ["aluminum"])
    """

    def __init__(
        self,
        matcher: DeterministicMatcher,
        resolver: Optional[GenerativeResolver] = None,
        setup_hint: Optional[str] = DEFAULT_SETUP_HINT,
    ):
        """
        :param matcher: Deterministic matcher (always runs)
        :param resolver: Generative resolver; None disables the fallback
        :param setup_hint: Rationale line added when no resolver is configured
            and the match is weak; None omits it
        """
        self._matcher = matcher
        self._resolver = resolver
        self._setup_hint = setup_hint

    @property
    def generative_enabled(self) -> bool:
        return self._resolver is not None

    def set_resolver(self, resolver: Optional[GenerativeResolver]) -> None:
        self._resolver = resolver

    async def resolve(
        self,
        provider: Provider,
        guessed_item_name: str,
        labels: List[str],
        vision_confidence: Optional[float] = None,
    ) -> ResolutionResponse:
        """
        Resolve an item description against a provider.

        :param provider: Catalog for the user's jurisdiction
        :param guessed_item_name: Free text or vision guess
        :param labels: Additional candidate strings (vision labels)
        :param vision_confidence: Optional vision model confidence
        :return: ResolutionResponse; best is None when the item is unknown
        """
        guessed_item_name = (guessed_item_name or "").strip()
        labels = [label for label in labels if label and label.strip()]

        # DeterministicMatch
        deterministic = self._matcher.match_best(provider, [guessed_item_name, *labels])
        best = deterministic.best
        matches = list(deterministic.matches)
        rationale = list(deterministic.rationale)

        deterministic_input = deterministic.confidence
        resolve_confidence: Optional[float] = None

        # GenerativeResolve
        adopted = None
        if self._should_resolve(deterministic, guessed_item_name):
            adopted = await self._try_generative(provider, guessed_item_name, labels, deterministic)
        elif (
            self._resolver is None
            and self._setup_hint
            and deterministic.confidence < GENERATIVE_TRIGGER_THRESHOLD
        ):
            rationale.append(self._setup_hint)

        if adopted is not None:
            best = adopted.best
            matches = merge_matches(adopted, matches, self._matcher.max_matches)
            resolve_confidence = adopted.confidence
            deterministic_input = max(deterministic.confidence, GENERATIVE_DETERMINISTIC_FLOOR)
            rationale.extend(adopted.reasoning)
            rationale.append("Matched via AI-assisted material lookup")
        elif best is not None and deterministic.confidence >= LOCAL_MATCH_NOTICE:
            rationale.append("Matched via local rules database")

        # Blend
        confidence = blend_confidence(deterministic_input, vision_confidence, resolve_confidence)

        # Decide
        if best is None or is_unknown(confidence):
            best = None

        logger.info(
            f"Resolved '{guessed_item_name}' in {provider.id}: "
            f"best={best.id if best else None}, confidence={confidence}, "
            f"generative={'adopted' if adopted else 'no'}"
        )

        return ResolutionResponse(
            best=best,
            matches=matches,
            confidence=confidence,
            rationale=rationale,
            provider_name=provider.display_name,
        )

    def _should_resolve(self, deterministic: MatchOutcome, guessed_item_name: str) -> bool:
        if self._resolver is None or not guessed_item_name:
            return False
        if deterministic.confidence >= GENERATIVE_TRIGGER_THRESHOLD:
            return False
        if not InputValidator.is_safe_for_model(guessed_item_name):
            logger.warning("Skipping generative resolve: item name failed injection screen")
            return False
        return True

    async def _try_generative(
        self,
        provider: Provider,
        guessed_item_name: str,
        labels: List[str],
        deterministic: MatchOutcome,
    ) -> Optional[ValidatedResolution]:
        """Run the resolver; return a validated result only when it should replace the match."""
        try:
            attempt = await self._resolver.resolve(provider, guessed_item_name, labels)
        except Exception as e:
            logger.warning(f"Generative resolver raised {type(e).__name__}: {e}", exc_info=True)
            attempt = ResolveFailure(reason=type(e).__name__)

        if isinstance(attempt, ResolveFailure):
            logger.info(f"Continuing deterministic-only: {attempt.reason}")
            return None

        if not isinstance(attempt, ResolveSuccess):
            return None

        validated = validate_resolution(provider, attempt.output)
        if validated is None:
            return None

        if validated.confidence <= deterministic.confidence:
            logger.debug(
                f"Generative confidence {validated.confidence} does not beat "
                f"deterministic {deterministic.confidence}"
            )
            return None

        return validated
