"""
Domain records for provider catalogs.

All records are frozen: a provider is loaded once and shared read-only
across requests.
"""
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class DisposalCategory(str, Enum):
    """Closed set of disposal outcomes."""
    RECYCLE = "recycle"
    TRASH = "trash"
    COMPOST = "compost"
    DROPOFF = "dropoff"
    HAZARDOUS = "hazardous"
    UNKNOWN = "unknown"
    DONATE = "donate"
    YARD_WASTE = "yard-waste"
    DEPOSIT = "deposit"


@dataclass(frozen=True)
class Material:
    id: str
    name: str
    category: DisposalCategory
    aliases: Tuple[str, ...] = ()
    instructions: Tuple[str, ...] = ()
    notes: Tuple[str, ...] = ()
    common_mistakes: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    examples: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "id": self.id,
            "name": self.name,
            "aliases": list(self.aliases),
            "category": self.category.value,
            "instructions": list(self.instructions),
            "notes": list(self.notes),
            "commonMistakes": list(self.common_mistakes),
        }
        if self.tags:
            result["tags"] = list(self.tags)
        if self.examples:
            result["examples"] = list(self.examples)
        return result


@dataclass(frozen=True)
class ProviderCoverage:
    country: str
    region: Optional[str] = None
    city: Optional[str] = None
    zips: Tuple[str, ...] = ()
    aliases: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"country": self.country}
        if self.region:
            result["region"] = self.region
        if self.city:
            result["city"] = self.city
        if self.zips:
            result["zips"] = list(self.zips)
        if self.aliases:
            result["aliases"] = list(self.aliases)
        return result


@dataclass(frozen=True)
class ProviderSource:
    name: str
    generated_at: str
    url: Optional[str] = None
    notes: Optional[str] = None
    license: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {"name": self.name, "generatedAt": self.generated_at}
        for key in ("url", "notes", "license"):
            value = getattr(self, key)
            if value:
                result[key] = value
        return result


@dataclass(frozen=True)
class RulesSummary:
    accepted_recycle: Tuple[str, ...] = ()
    accepted_compost: Tuple[str, ...] = ()
    accepted_trash: Tuple[str, ...] = ()
    not_accepted_recycle: Tuple[str, ...] = ()
    not_accepted_compost: Tuple[str, ...] = ()
    tips: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        accepted: Dict[str, Any] = {"recycle": list(self.accepted_recycle)}
        if self.accepted_compost:
            accepted["compost"] = list(self.accepted_compost)
        if self.accepted_trash:
            accepted["trash"] = list(self.accepted_trash)

        not_accepted: Dict[str, Any] = {"recycle": list(self.not_accepted_recycle)}
        if self.not_accepted_compost:
            not_accepted["compost"] = list(self.not_accepted_compost)

        return {
            "accepted": accepted,
            "notAccepted": not_accepted,
            "tips": list(self.tips),
        }


@dataclass(frozen=True)
class DropoffLocation:
    name: str
    accepts: Tuple[str, ...] = ()
    address: Optional[str] = None
    phone: Optional[str] = None
    url: Optional[str] = None
    hours: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name, "accepts": list(self.accepts)}
        for key in ("address", "phone", "url", "hours", "notes"):
            value = getattr(self, key)
            if value:
                result[key] = value
        return result


@dataclass(frozen=True)
class Provider:
    id: str
    display_name: str
    coverage: ProviderCoverage
    source: ProviderSource
    materials: Tuple[Material, ...]
    rules_summary: RulesSummary = field(default_factory=RulesSummary)
    locations: Tuple[DropoffLocation, ...] = ()

    def get_material(self, material_id: str) -> Optional[Material]:
        """Look up a material by id; None when the id is not in this catalog."""
        for material in self.materials:
            if material.id == material_id:
                return material
        return None

    def summary(self) -> Dict[str, Any]:
        """Listing entry used by the providers index."""
        return {
            "id": self.id,
            "displayName": self.display_name,
            "coverage": self.coverage.to_dict(),
        }

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "id": self.id,
            "displayName": self.display_name,
            "coverage": self.coverage.to_dict(),
            "source": self.source.to_dict(),
            "materials": [m.to_dict() for m in self.materials],
            "rulesSummary": self.rules_summary.to_dict(),
        }
        if self.locations:
            result["locations"] = [loc.to_dict() for loc in self.locations]
        return result


def round_score(value: float) -> float:
    """Round a score to 2 decimals, halves away from zero (0.125 -> 0.13)."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class MatchResult:
    """One ranked candidate: a catalog material and its [0, 1] score."""
    material: Material
    score: float

    def __post_init__(self):
        if not 0.0 <= self.score <= 1.0:
            raise ValueError(f"Score must be between 0.0 and 1.0, got {self.score}")

    def to_dict(self) -> Dict[str, Any]:
        return {"material": self.material.to_dict(), "score": self.score}
