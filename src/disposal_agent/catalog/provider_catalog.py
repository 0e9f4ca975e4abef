"""
Read-only provider catalog service.

Providers are loaded from ``<providers_dir>/<id>.json`` on first use and
cached for the life of the process. The catalog is injected into the
matcher and orchestrator instead of living in module-level state, so tests
can build one from synthetic providers.
"""
import json
import logging
import re
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError

from ..exceptions import ProviderLoadError, ProviderNotFoundError
from ..models import Provider
from .schemas import ProviderSchema

logger = logging.getLogger(__name__)

_PROVIDER_ID_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")


class ProviderCatalog:
    """
    Loads and caches jurisdiction providers.

    Usage:
        catalog = ProviderCatalog("data/providers")
        provider = catalog.load_provider("general")
    """

    def __init__(
        self,
        providers_dir: Optional[str] = None,
        providers: Optional[Iterable[Provider]] = None,
    ):
        """
        :param providers_dir: Directory holding provider JSON documents
        :param providers: Pre-built providers (used instead of, or on top of, the directory)
        """
        self._providers_dir = Path(providers_dir) if providers_dir else None
        self._cache: Dict[str, Provider] = {}
        self._lock = threading.Lock()

        for provider in providers or []:
            self._cache[provider.id] = provider

    @classmethod
    def from_providers(cls, providers: Iterable[Provider]) -> "ProviderCatalog":
        """Build an in-memory catalog (no directory backing)."""
        return cls(providers=providers)

    def load_provider(self, provider_id: str) -> Provider:
        """
        Return the provider for an id.

        :raises ProviderNotFoundError: if no document exists for the id
        :raises ProviderLoadError: if the document is malformed
        """
        cached = self._cache.get(provider_id)
        if cached is not None:
            return cached

        with self._lock:
            cached = self._cache.get(provider_id)
            if cached is not None:
                return cached

            provider = self._read_provider(provider_id)
            self._cache[provider_id] = provider
            logger.info(
                f"Loaded provider '{provider_id}' with {len(provider.materials)} materials"
            )
            return provider

    def list_provider_ids(self) -> List[str]:
        ids = set(self._cache.keys())
        if self._providers_dir is not None and self._providers_dir.is_dir():
            ids.update(p.stem for p in self._providers_dir.glob("*.json"))
        return sorted(ids)

    def list_providers(self) -> List[Provider]:
        return [self.load_provider(pid) for pid in self.list_provider_ids()]

    def find_provider_by_location(self, query: str) -> Optional[Provider]:
        """
        Match a free-text location against provider coverage.

        Checks city, region, zip codes, coverage aliases and "City, Region".
        The catch-all ``general`` provider is never returned.
        """
        normalized = query.strip().lower()
        if not normalized:
            return None

        for provider in self.list_providers():
            if provider.id == "general":
                continue

            coverage = provider.coverage
            if coverage.city and coverage.city.lower() == normalized:
                return provider
            if coverage.region and coverage.region.lower() == normalized:
                return provider
            if normalized in coverage.zips:
                return provider
            if any(alias.lower() == normalized for alias in coverage.aliases):
                return provider
            if (
                coverage.city
                and coverage.region
                and f"{coverage.city}, {coverage.region}".lower() == normalized
            ):
                return provider

        return None

    def clear_cache(self) -> None:
        """Drop cached providers so the next load re-reads from disk."""
        with self._lock:
            if self._providers_dir is not None:
                self._cache.clear()

    def _read_provider(self, provider_id: str) -> Provider:
        if self._providers_dir is None or not _PROVIDER_ID_PATTERN.match(provider_id):
            raise ProviderNotFoundError(f"Provider not found: {provider_id}")

        file_path = self._providers_dir / f"{provider_id}.json"
        if not file_path.is_file():
            raise ProviderNotFoundError(f"Provider not found: {provider_id}")

        try:
            with open(file_path, encoding="utf-8") as f:
                data = json.load(f)
            return ProviderSchema.model_validate(data).to_model()
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Invalid provider document {file_path}: {e}")
            raise ProviderLoadError(f"Provider '{provider_id}' is malformed") from e
