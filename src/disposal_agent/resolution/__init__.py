"""
Item resolution: generative fallback, catalog validation, confidence
blending and the orchestrator that sequences them.

Key components:
- ResolutionOrchestrator: deterministic match → generative fallback → blend → decide
- GenerativeResolver: bounded LLM call returning ResolveSuccess / ResolveFailure
- validate_resolution: turns untrusted model output into catalog materials
- blend_confidence: fixed-weight blend of text, vision and generative signals
"""
from .confidence import (
    blend_confidence,
    is_unknown,
    UNKNOWN_THRESHOLD,
    HIGH_CONFIDENCE_THRESHOLD,
    GENERATIVE_TRIGGER_THRESHOLD,
)
from .generative_resolver import (
    GenerativeResolver,
    ResolveAttempt,
    ResolveSuccess,
    ResolveFailure,
)
from .validation import ValidatedResolution, validate_resolution
from .orchestrator import ResolutionOrchestrator, merge_matches
from .resolver_factory import create_generative_resolver

__all__ = [
    "blend_confidence",
    "is_unknown",
    "UNKNOWN_THRESHOLD",
    "HIGH_CONFIDENCE_THRESHOLD",
    "GENERATIVE_TRIGGER_THRESHOLD",
    "GenerativeResolver",
    "ResolveAttempt",
    "ResolveSuccess",
    "ResolveFailure",
    "ValidatedResolution",
    "validate_resolution",
    "ResolutionOrchestrator",
    "merge_matches",
    "create_generative_resolver",
]
