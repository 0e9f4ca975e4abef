"""
Provider catalog: jurisdiction material lists loaded from JSON documents.
"""
from .provider_catalog import ProviderCatalog
from .schemas import ProviderSchema, MaterialSchema

__all__ = [
    "ProviderCatalog",
    "ProviderSchema",
    "MaterialSchema",
]
