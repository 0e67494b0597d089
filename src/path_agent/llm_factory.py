import logging
from typing import Any

logger = logging.getLogger(__name__)

# Optional LangChain chat model providers
try:
    from langchain_groq import ChatGroq
except ImportError:
    ChatGroq = None

try:
    from langchain_openai import ChatOpenAI
except ImportError:
    ChatOpenAI = None


KNOWN_GROQ_MODELS = [
    "llama-3.1-8b-instant",
    "llama-3.3-70b-versatile",
    "mixtral-8x7b-32768",
]


def get_llm_instance(provider: str, model: str) -> Any:
    """
    Factory to return a ready-to-use chat model based on provider name.

    :param provider: 'groq' or 'openai'
    :param model: LLM model name
    :return: LangChain chat model for LangChainInferenceBackend
    :raises: ImportError if the provider package is missing, ValueError for unknown providers
    """
    from .config_validator import get_required_env

    provider = provider.lower()
    
    if provider == "groq":
        if ChatGroq is None:
            raise ImportError("langchain_groq not installed (pip install path-agent-service[groq])")
        
        api_key = get_required_env(
            "GROQ_API_KEY",
            description="Groq API key for LLM (get from https://console.groq.com/keys)"
        )
        
        if model not in KNOWN_GROQ_MODELS:
            # Groq adds models often; only warn
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
            raise ImportError("langchain_openai not installed (pip install path-agent-service[openai])")
        
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
