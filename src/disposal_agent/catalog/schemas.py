"""
Pydantic schemas for provider catalog documents.

Documents are stored as camelCase JSON; these schemas validate them and
convert them into the frozen domain records in ``models``.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..models import (
    DisposalCategory,
    DropoffLocation,
    Material,
    Provider,
    ProviderCoverage,
    ProviderSource,
    RulesSummary,
)


class _CatalogModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class MaterialSchema(_CatalogModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    aliases: List[str] = Field(default_factory=list)
    category: DisposalCategory
    instructions: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    common_mistakes: List[str] = Field(default_factory=list, alias="commonMistakes")
    tags: List[str] = Field(default_factory=list)
    examples: List[str] = Field(default_factory=list)

    def to_model(self) -> Material:
        return Material(
            id=self.id,
            name=self.name,
            category=self.category,
            aliases=tuple(a for a in self.aliases if a.strip()),
            instructions=tuple(self.instructions),
            notes=tuple(self.notes),
            common_mistakes=tuple(self.common_mistakes),
            tags=tuple(self.tags),
            examples=tuple(self.examples),
        )


class AcceptedSchema(_CatalogModel):
    recycle: List[str] = Field(default_factory=list)
    compost: List[str] = Field(default_factory=list)
    trash: List[str] = Field(default_factory=list)


class NotAcceptedSchema(_CatalogModel):
    recycle: List[str] = Field(default_factory=list)
    compost: List[str] = Field(default_factory=list)


class RulesSummarySchema(_CatalogModel):
    accepted: AcceptedSchema = Field(default_factory=AcceptedSchema)
    not_accepted: NotAcceptedSchema = Field(
        default_factory=NotAcceptedSchema, alias="notAccepted"
    )
    tips: List[str] = Field(default_factory=list)

    def to_model(self) -> RulesSummary:
        return RulesSummary(
            accepted_recycle=tuple(self.accepted.recycle),
            accepted_compost=tuple(self.accepted.compost),
            accepted_trash=tuple(self.accepted.trash),
            not_accepted_recycle=tuple(self.not_accepted.recycle),
            not_accepted_compost=tuple(self.not_accepted.compost),
            tips=tuple(self.tips),
        )


class ProviderCoverageSchema(_CatalogModel):
    country: str = Field(min_length=1)
    region: Optional[str] = None
    city: Optional[str] = None
    zips: List[str] = Field(default_factory=list)
    aliases: List[str] = Field(default_factory=list)

    def to_model(self) -> ProviderCoverage:
        return ProviderCoverage(
            country=self.country,
            region=self.region,
            city=self.city,
            zips=tuple(self.zips),
            aliases=tuple(self.aliases),
        )


class ProviderSourceSchema(_CatalogModel):
    name: str = Field(min_length=1)
    generated_at: str = Field(min_length=1, alias="generatedAt")
    url: Optional[str] = None
    notes: Optional[str] = None
    license: Optional[str] = None

    def to_model(self) -> ProviderSource:
        return ProviderSource(
            name=self.name,
            generated_at=self.generated_at,
            url=self.url,
            notes=self.notes,
            license=self.license,
        )


class DropoffLocationSchema(_CatalogModel):
    name: str = Field(min_length=1)
    accepts: List[str] = Field(default_factory=list)
    address: Optional[str] = None
    phone: Optional[str] = None
    url: Optional[str] = None
    hours: Optional[str] = None
    notes: Optional[str] = None

    def to_model(self) -> DropoffLocation:
        return DropoffLocation(
            name=self.name,
            accepts=tuple(self.accepts),
            address=self.address,
            phone=self.phone,
            url=self.url,
            hours=self.hours,
            notes=self.notes,
        )


class ProviderSchema(_CatalogModel):
    id: str = Field(min_length=1)
    display_name: str = Field(min_length=1, alias="displayName")
    coverage: ProviderCoverageSchema
    source: ProviderSourceSchema
    materials: List[MaterialSchema] = Field(min_length=1)
    rules_summary: RulesSummarySchema = Field(
        default_factory=RulesSummarySchema, alias="rulesSummary"
    )
    locations: List[DropoffLocationSchema] = Field(default_factory=list)

    @field_validator("materials")
    @classmethod
    def _unique_material_ids(cls, materials: List[MaterialSchema]) -> List[MaterialSchema]:
        seen = set()
        for material in materials:
            if material.id in seen:
                raise ValueError(f"duplicate material id: {material.id}")
            seen.add(material.id)
        return materials

    @model_validator(mode="after")
    def _strip_display_name(self) -> "ProviderSchema":
        self.display_name = self.display_name.strip()
        return self

    def to_model(self) -> Provider:
        return Provider(
            id=self.id,
            display_name=self.display_name,
            coverage=self.coverage.to_model(),
            source=self.source.to_model(),
            materials=tuple(m.to_model() for m in self.materials),
            rules_summary=self.rules_summary.to_model(),
            locations=tuple(loc.to_model() for loc in self.locations),
        )
