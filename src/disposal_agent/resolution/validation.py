"""
Cross-check of generative output against the provider catalog.

A ResolveOutput is untrusted. Only after every referenced id is found in
the provider does it become a ValidatedResolution holding real materials.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..models import Material, MatchResult, Provider
from ..schemas import ResolveOutput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidatedResolution:
    best: Material
    confidence: float
    alternatives: Tuple[MatchResult, ...] = ()
    reasoning: Tuple[str, ...] = ()

    def as_matches(self) -> List[MatchResult]:
        """Best first, then alternatives."""
        return [MatchResult(material=self.best, score=self.confidence), *self.alternatives]


def validate_resolution(provider: Provider, output: ResolveOutput) -> Optional[ValidatedResolution]:
    """
    Keep only what the catalog can vouch for.

    :return: None when the output names no best id or an id absent from the
             provider; otherwise the resolution with unknown and duplicate
             alternatives removed and alternative scores capped at the
             best's confidence
    """
    if not output.best_material_id:
        return None

    best = provider.get_material(output.best_material_id)
    if best is None:
        logger.warning(
            f"Discarding generative result: material '{output.best_material_id}' "
            f"is not in provider '{provider.id}'"
        )
        return None

    seen = {best.id}
    alternatives: List[MatchResult] = []
    for alternative in output.alternatives:
        material = provider.get_material(alternative.material_id)
        if material is None or material.id in seen:
            continue
        seen.add(material.id)
        alternatives.append(
            MatchResult(material=material, score=min(alternative.score, output.resolve_confidence))
        )

    return ValidatedResolution(
        best=best,
        confidence=output.resolve_confidence,
        alternatives=tuple(alternatives),
        reasoning=tuple(r for r in output.reasoning if r),
    )
