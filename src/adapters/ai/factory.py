"""
Fabrique des clients IA a partir de la configuration.

Le fournisseur est choisi par SUBPAIR_AI_PROVIDER :
- openai : OpenAIClient
- openrouter : OpenRouterClient (URL OpenRouter si l'URL par defaut d'OpenAI est conservee)
- azure-openai : AzureOpenAIClient (deploiement + version d'API)
"""

from typing import TYPE_CHECKING

from loguru import logger

from src.adapters.ai.azure_openai_client import AzureOpenAIClient
from src.adapters.ai.base_client import BaseChatClient
from src.adapters.ai.openai_client import OpenAIClient
from src.adapters.ai.openrouter_client import OpenRouterClient
from src.core.exceptions import AIConfigurationError, MissingAPIKeyError

if TYPE_CHECKING:
    from src.config import Settings


def create_ai_client(settings: "Settings") -> BaseChatClient:
    """
    Construit le client du fournisseur configure.

    Raises:
        MissingAPIKeyError: Aucune cle API configuree
        AIConfigurationError: Fournisseur inconnu, URL ou deploiement invalide
    """
    provider = settings.ai_provider
    if not settings.ai_api_key:
        raise MissingAPIKeyError(provider)

    common = {
        "api_key": settings.ai_api_key,
        "model": settings.ai_model,
        "temperature": settings.ai_temperature,
        "max_tokens": settings.ai_max_tokens,
        "request_timeout": settings.ai_request_timeout_seconds,
        "retry_config": settings.retry_config,
    }

    if provider == "openai":
        client: BaseChatClient = OpenAIClient(base_url=settings.ai_base_url, **common)
    elif provider == "openrouter":
        base_url = settings.ai_base_url
        if base_url.rstrip("/") == OpenAIClient.DEFAULT_BASE_URL:
            base_url = OpenRouterClient.DEFAULT_BASE_URL
        client = OpenRouterClient(base_url=base_url, **common)
    elif provider == "azure-openai":
        client = AzureOpenAIClient(
            base_url=settings.ai_base_url,
            deployment_id=settings.azure_deployment_id or "",
            api_version=settings.azure_api_version,
            **common,
        )
    else:
        raise AIConfigurationError(f"Fournisseur IA inconnu: {provider!r}")

    logger.debug("Client IA cree", provider=provider, model=settings.ai_model)
    return client
