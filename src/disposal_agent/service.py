import asyncio
import logging
from typing import List, Optional

from .catalog import ProviderCatalog
from .config import DisposalAgentConfig
from .exceptions import ServiceNotInitializedError
from .llm_factory import API_KEY_ENV
from .matching import DeterministicMatcher, SearchEngine, SearchResponse
from .models import Provider
from .resolution import GenerativeResolver, ResolutionOrchestrator
from .schemas import ResolutionResponse, ResolveRequest, ScanOutput
from .security import InputValidator
from .tools import VisionTool

logger = logging.getLogger(__name__)


def setup_hint(config: DisposalAgentConfig) -> Optional[str]:
    """Rationale hint naming the configured provider's API key; None when the resolver is switched off."""
    if not config.enable_generative_resolver:
        return None
    key_name = API_KEY_ENV.get(config.llm_provider.lower(), "OPENAI_API_KEY")
    return f"Set {key_name} for smarter item recognition"


class DisposalAgentService:
    """
    Facade over the item resolution subsystem.
    The ONLY entry point for the HTTP layer.
    """

    def __init__(self, config: DisposalAgentConfig, catalog: Optional[ProviderCatalog] = None):
        """
        Composition root.
        Matcher, search engine and orchestrator are created and wired here.
        """
        self.config = config

        self._catalog = catalog
        self._matcher = DeterministicMatcher(max_matches=config.max_matches)
        self._search_engine = SearchEngine(self._matcher, default_limit=config.search_limit)
        self._orchestrator = ResolutionOrchestrator(self._matcher, setup_hint=setup_hint(config))
        self._vision_tool: Optional[VisionTool] = None

    # ----------------------------
    # Catalog access
    # ----------------------------
    def get_provider(self, provider_id: str) -> Provider:
        """
        :raises ProviderNotFoundError: for an unknown id (no fallback catalog is used)
        """
        return self._require_catalog().load_provider(provider_id)

    def list_providers(self) -> List[Provider]:
        return self._require_catalog().list_providers()

    def find_provider_by_location(self, location: str) -> Optional[Provider]:
        return self._require_catalog().find_provider_by_location(location)

    # ----------------------------
    # Resolution
    # ----------------------------
    async def resolve_async(self, request: ResolveRequest) -> ResolutionResponse:
        provider = self.get_provider(request.provider_id)
        return await self._orchestrator.resolve(
            provider,
            request.guessed_item_name,
            request.labels,
            vision_confidence=request.vision_confidence,
        )

    def resolve(self, request: ResolveRequest) -> ResolutionResponse:
        """
        Resolve an item for a provider.

        Runs the async pipeline to completion on a fresh event loop; call
        resolve_async from code that already owns a loop.
        """
        return asyncio.run(self.resolve_async(request))

    def resolve_scan(self, provider_id: str, scan: ScanOutput) -> ResolutionResponse:
        """
        Resolve a vision scan: guessed name, labels and vision confidence.

        Scan text is trimmed to the request limits rather than rejected.
        """
        provider = self.get_provider(provider_id)
        guessed = InputValidator.strip_control_chars(scan.guessed_item_name)[:InputValidator.MAX_QUERY_LENGTH]
        labels = [
            InputValidator.strip_control_chars(label)[:InputValidator.MAX_LABEL_LENGTH]
            for label in scan.labels[:InputValidator.MAX_LABELS]
        ]
        vision_confidence = scan.vision_confidence if (scan.guessed_item_name or scan.labels) else None
        return asyncio.run(self._orchestrator.resolve(provider, guessed, labels, vision_confidence=vision_confidence))

    def scan_and_resolve(self, provider_id: str, image_path: str) -> ResolutionResponse:
        """Label an image with the injected vision tool, then resolve the result."""
        if not self._vision_tool:
            raise ServiceNotInitializedError("Vision tool is not configured.")

        scan = self._vision_tool.scan(image_path)
        logger.info(
            f"Scan labels={scan.labels}, guess='{scan.guessed_item_name}', "
            f"vision_confidence={scan.vision_confidence}"
        )
        return self.resolve_scan(provider_id, scan)

    # ----------------------------
    # Search
    # ----------------------------
    def search(self, provider_id: str, query: str, limit: Optional[int] = None) -> SearchResponse:
        provider = self.get_provider(provider_id)
        return self._search_engine.search_with_suggestions(provider, query, limit)

    # ----------------------------
    # Dependency injection setters
    # ----------------------------
    def set_catalog(self, catalog: ProviderCatalog) -> None:
        """Inject the provider catalog."""
        self._catalog = catalog

    def set_generative_resolver(self, resolver: Optional[GenerativeResolver]) -> None:
        """Inject (or remove, with None) the generative fallback."""
        self._orchestrator.set_resolver(resolver)

    def set_vision_tool(self, vision_tool: VisionTool) -> None:
        """Inject an image-labeling tool."""
        self._vision_tool = vision_tool

    @property
    def generative_enabled(self) -> bool:
        return self._orchestrator.generative_enabled

    def _require_catalog(self) -> ProviderCatalog:
        if self._catalog is None:
            raise ServiceNotInitializedError("Provider catalog is not configured.")
        return self._catalog
