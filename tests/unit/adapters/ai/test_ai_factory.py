"""Tests pour create_ai_client (choix du fournisseur selon la configuration)."""

import pytest

from src.adapters.ai.azure_openai_client import AzureOpenAIClient
from src.adapters.ai.factory import create_ai_client
from src.adapters.ai.openai_client import OpenAIClient
from src.adapters.ai.openrouter_client import OpenRouterClient
from src.config import Settings
from src.core.exceptions import AIConfigurationError, MissingAPIKeyError


def settings(**overrides) -> Settings:
    values = {"ai_api_key": "key", "ai_model": "gpt-test"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestCreateAIClient:
    """Tests pour create_ai_client."""

    def test_openai_by_default(self) -> None:
        client = create_ai_client(settings())

        assert isinstance(client, OpenAIClient)
        assert client.model == "gpt-test"
        assert client.base_url == "https://api.openai.com/v1"

    def test_missing_key_raises(self) -> None:
        with pytest.raises(MissingAPIKeyError) as exc_info:
            create_ai_client(settings(ai_api_key=None))

        assert exc_info.value.provider == "openai"

    def test_openrouter_uses_its_own_default_url(self) -> None:
        client = create_ai_client(settings(ai_provider="openrouter"))

        assert isinstance(client, OpenRouterClient)
        assert client.base_url == "https://openrouter.ai/api/v1"

    def test_openrouter_keeps_custom_url(self) -> None:
        client = create_ai_client(
            settings(ai_provider="OpenRouter", ai_base_url="https://proxy.local/api/v1")
        )

        assert client.base_url == "https://proxy.local/api/v1"

    def test_azure_requires_deployment(self) -> None:
        with pytest.raises(AIConfigurationError):
            create_ai_client(
                settings(ai_provider="azure-openai", ai_base_url="https://res.openai.azure.com")
            )

    def test_azure_with_deployment(self) -> None:
        client = create_ai_client(
            settings(
                ai_provider="azure-openai",
                ai_base_url="https://res.openai.azure.com",
                azure_deployment_id="prod",
            )
        )

        assert isinstance(client, AzureOpenAIClient)

    def test_invalid_base_url_raises(self) -> None:
        with pytest.raises(AIConfigurationError):
            create_ai_client(settings(ai_base_url="not a url"))

    def test_retry_settings_forwarded(self) -> None:
        client = create_ai_client(
            settings(ai_retry_attempts=5, ai_retry_delay_ms=250, ai_retry_max_delay_ms=2000)
        )

        config = client._retry_config
        assert (config.max_attempts, config.base_delay, config.max_delay) == (5, 0.25, 2.0)
