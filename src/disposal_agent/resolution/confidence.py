"""
Confidence blending across signal sources.
"""
from typing import Optional

from ..models import round_score

UNKNOWN_THRESHOLD = 0.4
HIGH_CONFIDENCE_THRESHOLD = 0.75
GENERATIVE_TRIGGER_THRESHOLD = 0.8

DETERMINISTIC_WEIGHT = 0.5
VISION_WEIGHT = 0.25
RESOLVE_WEIGHT = 0.25


def clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def blend_confidence(
    deterministic: float,
    vision: Optional[float] = None,
    resolve: Optional[float] = None,
) -> float:
    """
    Weighted average of the confidences that are present.

    Absent inputs drop out of the denominator instead of counting as zero.
    With no optional input the deterministic confidence is returned as is.

    :param deterministic: Text-match confidence
    :param vision: Vision model confidence, if an image was scanned
    :param resolve: Validated generative resolver confidence
    :return: Blended confidence in [0, 1], rounded to 2 decimals
    """
    if vision is None and resolve is None:
        return deterministic

    total = clamp(deterministic) * DETERMINISTIC_WEIGHT
    weight_sum = DETERMINISTIC_WEIGHT

    if vision is not None:
        total += clamp(vision) * VISION_WEIGHT
        weight_sum += VISION_WEIGHT

    if resolve is not None:
        total += clamp(resolve) * RESOLVE_WEIGHT
        weight_sum += RESOLVE_WEIGHT

    return round_score(total / weight_sum)


def is_unknown(confidence: float) -> bool:
    return confidence < UNKNOWN_THRESHOLD
