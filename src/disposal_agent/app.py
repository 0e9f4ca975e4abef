"""
Public application facade for Disposal Agent Service.

This is the single stable entry point for the library.
All internal structure can change freely, but this API remains stable.
"""
import logging
import os
from pathlib import Path
from typing import List, Optional

from .catalog import ProviderCatalog
from .config import DisposalAgentConfig
from .config_validator import validate_path
from .matching import SearchResponse
from .models import Provider
from .resolution import create_generative_resolver
from .schemas import ResolutionResponse, ResolveRequest, ScanOutput
from .service import DisposalAgentService

logger = logging.getLogger(__name__)


class DisposalAgentApp:
    """
    Public application facade for Disposal Agent Service.

    All dependency wiring and factory usage is encapsulated here.

    Usage:
        config = load_config_from_env()
        app = DisposalAgentApp(config)
        app.initialize()
        response = app.resolve(ResolveRequest(provider_id="general", guessed_item_name="soda can", labels=[]))
    """

    def __init__(self, config: DisposalAgentConfig, catalog: Optional[ProviderCatalog] = None):
        """
        :param config: DisposalAgentConfig instance
        :param catalog: Optional pre-built catalog (skips the directory lookup)
        """
        self._config = config
        self._catalog = catalog
        self._service: Optional[DisposalAgentService] = None

    def initialize(self) -> None:
        """
        Wire the service.

        - Resolves a relative providers directory against the service root
        - Creates the provider catalog
        - Creates the generative resolver when an API key is configured

        Call this once before resolving or searching.
        """
        if self._service:
            return

        if self._catalog is None:
            # Relative paths are relative to the service root, not the caller's CWD
            service_dir = Path(__file__).parent.parent.parent
            if not os.path.isabs(self._config.providers_dir):
                self._config.providers_dir = str(service_dir / self._config.providers_dir)
            validate_path(self._config.providers_dir, "PROVIDERS_DIR", must_exist=True)
            self._catalog = ProviderCatalog(self._config.providers_dir)

        service = DisposalAgentService(self._config, catalog=self._catalog)
        service.set_generative_resolver(create_generative_resolver(self._config))
        self._service = service

        logger.info(
            f"Disposal agent initialized: providers={self._catalog.list_provider_ids()}, "
            f"generative={'on' if service.generative_enabled else 'off'}"
        )

    @property
    def service(self) -> DisposalAgentService:
        if not self._service:
            raise RuntimeError("App not initialized. Call initialize() first.")
        return self._service

    @property
    def default_provider_id(self) -> str:
        return self._config.default_provider_id

    def resolve(self, request: ResolveRequest) -> ResolutionResponse:
        return self.service.resolve(request)

    def resolve_scan(self, provider_id: str, scan: ScanOutput) -> ResolutionResponse:
        return self.service.resolve_scan(provider_id, scan)

    def search(self, provider_id: str, query: str, limit: Optional[int] = None) -> SearchResponse:
        return self.service.search(provider_id, query, limit)

    def get_provider(self, provider_id: str) -> Provider:
        return self.service.get_provider(provider_id)

    def list_providers(self) -> List[Provider]:
        return self.service.list_providers()
