from dataclasses import dataclass
from typing import Optional


@dataclass
class DisposalAgentConfig:
    # Core paths
    providers_dir: str = "data/providers"
    default_provider_id: str = "general"

    # LLM / generative resolver
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"
    enable_generative_resolver: bool = True
    generative_timeout_seconds: float = 10.0

    # Matching
    max_matches: int = 5
    search_limit: int = 8

    # Logging
    log_level: str = "INFO"

    # Optional pre-built chat model (injected by tests or the app facade)
    llm: Optional[object] = None
