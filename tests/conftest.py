"""
Shared fixtures: small synthetic catalogs plus the shipped provider data.
"""
from pathlib import Path

import pytest

from disposal_agent.catalog import ProviderCatalog
from disposal_agent.models import (
    DisposalCategory,
    Material,
    Provider,
    ProviderCoverage,
    ProviderSource,
)

PROVIDERS_DIR = Path(__file__).parent.parent / "data" / "providers"


def make_material(material_id, name, category=DisposalCategory.RECYCLE, aliases=(), tags=(), examples=()):
    return Material(
        id=material_id,
        name=name,
        category=category,
        aliases=tuple(aliases),
        tags=tuple(tags),
        examples=tuple(examples),
    )


def make_provider(provider_id, materials, display_name=None, coverage=None):
    return Provider(
        id=provider_id,
        display_name=display_name or provider_id.title(),
        coverage=coverage or ProviderCoverage(country="US"),
        source=ProviderSource(name="Test data", generated_at="2026-01-01"),
        materials=tuple(materials),
    )


@pytest.fixture
def provider():
    """Synthetic jurisdiction covering every matching tier."""
    return make_provider(
        "testville",
        [
            make_material("aluminum-cans", "Aluminum Cans", aliases=["soda can", "aluminum can"], tags=["metal"]),
            make_material("plastic-bottles", "Plastic Bottles", aliases=["plastic bottle", "water bottle"], tags=["plastic"]),
            make_material("plastic-bags", "Plastic Bags", DisposalCategory.TRASH, aliases=["plastic bag", "grocery bag"]),
            make_material("batteries", "Batteries", DisposalCategory.HAZARDOUS, aliases=["battery"]),
            make_material("scrap-metal", "Scrap Metal", DisposalCategory.DROPOFF, aliases=["keys"]),
            make_material("paper", "Paper", aliases=["office paper"]),
            make_material("foam", "Foam", DisposalCategory.TRASH, aliases=["styrofoam"]),
            make_material("food-scraps", "Food Scraps", DisposalCategory.COMPOST, examples=["banana peel"]),
            make_material("glass-jars", "Glass Jars", aliases=["glass", "jar"]),
            make_material("glass", "Glass"),
        ],
        display_name="Testville",
        coverage=ProviderCoverage(
            country="US",
            region="TS",
            city="Testville",
            zips=("12345",),
            aliases=("test city",),
        ),
    )


@pytest.fixture
def general_provider():
    return make_provider(
        "general",
        [
            make_material("plastic-bottles", "Plastic Bottles", aliases=["plastic bottle"]),
            make_material("batteries", "Batteries", DisposalCategory.HAZARDOUS),
        ],
        display_name="General",
    )


@pytest.fixture
def catalog(provider, general_provider):
    return ProviderCatalog.from_providers([provider, general_provider])


@pytest.fixture
def data_catalog():
    """Catalog over the provider documents shipped in data/providers."""
    return ProviderCatalog(str(PROVIDERS_DIR))
