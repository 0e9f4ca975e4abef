"""
Configuration loader with validation.
"""
from dotenv import load_dotenv
from .config import DisposalAgentConfig
from .config_validator import (
    get_bool_env,
    get_float_env,
    get_int_env,
    get_optional_env,
)
from .exceptions import ConfigurationError


SUPPORTED_LLM_PROVIDERS = ("openai", "groq")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_config_from_env(load_env_file: bool = True) -> DisposalAgentConfig:
    """
    Load configuration from environment variables with validation.

    Usage:
        config = load_config_from_env()
        app = DisposalAgentApp(config)
        app.initialize()

    :param load_env_file: Read a local .env file first (development)
    :return: Validated DisposalAgentConfig instance
    :raises: ConfigurationError if a value is malformed
    """
    if load_env_file:
        load_dotenv()

    llm_provider = get_optional_env("LLM_PROVIDER", default="openai").lower()
    if llm_provider not in SUPPORTED_LLM_PROVIDERS:
        raise ConfigurationError(
            f"LLM_PROVIDER must be one of {list(SUPPORTED_LLM_PROVIDERS)}, "
            f"got {llm_provider!r}"
        )

    log_level = get_optional_env("LOG_LEVEL", default="INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(f"LOG_LEVEL must be one of {list(LOG_LEVELS)}, got {log_level!r}")

    default_model = "gpt-4o-mini" if llm_provider == "openai" else "llama-3.1-8b-instant"

    return DisposalAgentConfig(
        providers_dir=get_optional_env("PROVIDERS_DIR", default="data/providers"),
        default_provider_id=get_optional_env("DEFAULT_PROVIDER_ID", default="general"),
        llm_provider=llm_provider,
        llm_model=get_optional_env("LLM_MODEL", default=default_model),
        enable_generative_resolver=get_bool_env("ENABLE_GENERATIVE_RESOLVER", True),
        generative_timeout_seconds=get_float_env(
            "GENERATIVE_TIMEOUT_SECONDS", 10.0, min_value=0.5, max_value=120.0
        ),
        max_matches=get_int_env("MAX_MATCHES", 5, min_value=1, max_value=50),
        search_limit=get_int_env("SEARCH_LIMIT", 8, min_value=1, max_value=50),
        log_level=log_level,
    )


def create_config_for_production() -> DisposalAgentConfig:
    """
    Create configuration for production deployment.

    Environment variables only; no .env file is read.
    """
    return load_config_from_env(load_env_file=False)
