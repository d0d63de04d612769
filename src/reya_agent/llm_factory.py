import logging
from typing import Any

# Optional providers, installed through the "groq" / "openai" extras
try:
    from langchain_groq import ChatGroq
except ImportError:
    ChatGroq = None

try:
    from langchain_openai import ChatOpenAI
except ImportError:
    ChatOpenAI = None

logger = logging.getLogger(__name__)

KNOWN_GROQ_MODELS = [
    "llama-3.1-8b-instant",
    "llama-3.3-70b-versatile",
    "llama-3.2-3b-preview",
    "mixtral-8x7b-32768",
]


def get_llm_instance(provider: str, model: str) -> Any:
    """
    Factory to return a ready-to-use chat model based on provider name.

    The model only classifies intent and extracts symbols, so it is built
    with temperature 0.

    :param provider: 'groq' or 'openai'
    :param model: LLM model name
    :return: LangChain chat model ready to wrap in LangChainRuntime
    :raises: ImportError if the provider package is not installed
    :raises: ConfigurationError if the provider API key is missing
    :raises: ValueError for an unknown provider
    """
    provider = provider.lower()

    if provider == "groq":
        if ChatGroq is None:
            raise ImportError("langchain_groq not installed (pip install reya-agent[groq])")

        from .config_validator import get_required_env
        api_key = get_required_env(
            "GROQ_API_KEY",
            description="Groq API key for LLM (get from https://console.groq.com/keys)"
        )

        if model not in KNOWN_GROQ_MODELS:
            # Groq adds models often
            logger.warning(
                f"Model '{model}' not in known Groq models. Known models: {KNOWN_GROQ_MODELS}"
            )

        return ChatGroq(
            model=model,
            api_key=api_key,
            temperature=0,
            streaming=False,
        )

    elif provider == "openai":
        if ChatOpenAI is None:
            raise ImportError("langchain_openai not installed (pip install reya-agent[openai])")
        from .config_validator import get_required_env
        api_key = get_required_env(
            "OPENAI_API_KEY",
            description="OpenAI API key for LLM (get from https://platform.openai.com/api-keys)"
        )
        return ChatOpenAI(
            model=model,
            api_key=api_key,
            temperature=0,
            streaming=False,
        )

    else:
        raise ValueError(f"Unknown LLM provider: {provider}")
