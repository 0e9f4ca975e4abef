"""
Factory for the generative resolver.

Returns None whenever the fallback cannot run, so callers wire the
orchestrator the same way with or without an API key.
"""
import logging
from typing import Optional

from ..config import DisposalAgentConfig
from ..config_validator import has_api_key
from ..exceptions import ConfigurationError
from ..llm_factory import API_KEY_ENV, get_llm_instance
from .generative_resolver import GenerativeResolver

logger = logging.getLogger(__name__)


def create_generative_resolver(config: Optional[DisposalAgentConfig] = None) -> Optional[GenerativeResolver]:
    """
    Build a GenerativeResolver from configuration.

    Uses ``config.llm`` when one is injected; otherwise builds a chat model
    only if the provider's API key is configured.

    :param config: DisposalAgentConfig instance
    :return: GenerativeResolver if enabled and configured, None otherwise
    """
    if config is None or not config.enable_generative_resolver:
        return None

    llm = config.llm
    if llm is None:
        key_name = API_KEY_ENV.get(config.llm_provider.lower())
        if key_name is None or not has_api_key(key_name):
            logger.warning(
                f"{key_name or 'API key'} not set: generative resolver disabled, "
                f"deterministic matching only"
            )
            return None

        try:
            llm = get_llm_instance(
                provider=config.llm_provider,
                model=config.llm_model,
                timeout_seconds=config.generative_timeout_seconds,
            )
        except (ConfigurationError, ValueError) as e:
            logger.warning(f"Generative resolver disabled: {e}")
            return None

    return GenerativeResolver(llm, timeout_seconds=config.generative_timeout_seconds)
