"""
Request, response and collaborator contracts.

Inbound request bodies and collaborator payloads are pydantic models so a
shape violation surfaces as a ``pydantic.ValidationError``; the engine's own
response is a plain dataclass.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import Material, MatchResult
from .security.input_validator import InputValidator


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ResolveRequest(_CamelModel):
    """Body of POST /resolve."""
    provider_id: str = Field(alias="providerId", min_length=1, max_length=64)
    guessed_item_name: str = Field(
        alias="guessedItemName", max_length=InputValidator.MAX_QUERY_LENGTH
    )
    labels: List[str] = Field(max_length=InputValidator.MAX_LABELS)
    vision_confidence: Optional[float] = Field(
        default=None, alias="visionConfidence", ge=0.0, le=1.0
    )

    @field_validator("guessed_item_name")
    @classmethod
    def _clean_item_name(cls, value: str) -> str:
        return InputValidator.strip_control_chars(value).strip()

    @field_validator("labels")
    @classmethod
    def _clean_labels(cls, labels: List[str]) -> List[str]:
        cleaned = []
        for label in labels:
            if len(label) > InputValidator.MAX_LABEL_LENGTH:
                raise ValueError(
                    f"label exceeds maximum length of {InputValidator.MAX_LABEL_LENGTH} characters"
                )
            cleaned.append(InputValidator.strip_control_chars(label).strip())
        return cleaned


class ScanOutput(_CamelModel):
    """Payload supplied by the vision collaborator for one image."""
    labels: List[str] = Field(default_factory=list)
    guessed_item_name: str = Field(default="", alias="guessedItemName")
    vision_confidence: float = Field(default=0.0, alias="visionConfidence", ge=0.0, le=1.0)
    notes: List[str] = Field(default_factory=list)

    @classmethod
    def empty(cls, note: str = "Scan failed") -> "ScanOutput":
        """Well-formed result for a failed scan."""
        return cls(labels=[], guessed_item_name="", vision_confidence=0.0, notes=[note])


class ResolveAlternative(_CamelModel):
    material_id: str = Field(alias="materialId")
    score: float = Field(ge=0.0, le=1.0)


class ResolveOutput(_CamelModel):
    """
    Untrusted payload returned by the generative collaborator.

    Material ids in here have not been checked against any catalog.
    """
    best_material_id: Optional[str] = Field(alias="bestMaterialId")
    alternatives: List[ResolveAlternative] = Field(default_factory=list)
    resolve_confidence: float = Field(alias="resolveConfidence", ge=0.0, le=1.0)
    reasoning: List[str] = Field(default_factory=list)


@dataclass
class ResolutionResponse:
    best: Optional[Material]
    matches: List[MatchResult]
    confidence: float
    rationale: List[str] = field(default_factory=list)
    provider_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "best": self.best.to_dict() if self.best else None,
            "matches": [m.to_dict() for m in self.matches],
            "confidence": self.confidence,
            "rationale": list(self.rationale),
            "providerName": self.provider_name,
        }
