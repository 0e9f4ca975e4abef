from typing import Any

from langchain_groq import ChatGroq
from langchain_openai import ChatOpenAI

from .config_validator import get_required_env


API_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "groq": "GROQ_API_KEY",
}


def get_llm_instance(provider: str, model: str, timeout_seconds: float = 10.0) -> Any:
    """
    Factory to return a ready-to-use chat model based on provider name.

    :param provider: 'openai' or 'groq'
    :param model: LLM model name
    :param timeout_seconds: Per-request HTTP timeout passed to the client
    :return: LangChain chat model for the generative resolver
    :raises ConfigurationError: if the provider's API key is missing
    """
    provider = provider.lower()

    if provider == "openai":
        api_key = get_required_env(
            "OPENAI_API_KEY",
            description="OpenAI API key for the generative resolver (https://platform.openai.com/api-keys)"
        )
        return ChatOpenAI(
            model=model,
            api_key=api_key,
            temperature=0,
            max_tokens=300,
            timeout=timeout_seconds,
            max_retries=1,
        )

    elif provider == "groq":
        api_key = get_required_env(
            "GROQ_API_KEY",
            description="Groq API key for the generative resolver (https://console.groq.com/keys)"
        )
        return ChatGroq(
            model=model,
            api_key=api_key,
            temperature=0,
            max_tokens=300,
            timeout=timeout_seconds,
            max_retries=1,
        )

    else:
        raise ValueError(f"Unknown LLM provider: {provider}")
