"""
Client Azure OpenAI.

L'URL porte l'identifiant de deploiement et la version d'API :
    {base_url}/openai/deployments/{deployment_id}/chat/completions?api-version={version}

Authentification :
- cle simple -> en-tete "api-key"
- cle commencant par "Bearer " (jeton Entra ID) -> transmise telle quelle
  dans "Authorization"
"""

from src.adapters.ai.base_client import BaseChatClient
from src.core.exceptions import AIConfigurationError

DEFAULT_API_VERSION = "2025-04-01-preview"


class AzureOpenAIClient(BaseChatClient):
    """Variante deploiement : URL specifique et en-tete api-key."""

    provider_name = "azure-openai"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        deployment_id: str,
        api_version: str = DEFAULT_API_VERSION,
        **kwargs,
    ) -> None:
        if not deployment_id:
            raise AIConfigurationError(
                "Azure OpenAI necessite un identifiant de deploiement "
                "(SUBPAIR_AZURE_DEPLOYMENT_ID)"
            )
        super().__init__(api_key=api_key, model=model, base_url=base_url, **kwargs)
        self._deployment_id = deployment_id
        self._api_version = api_version or DEFAULT_API_VERSION

    def _endpoint_url(self) -> str:
        return (
            f"{self._base_url}/openai/deployments/{self._deployment_id}"
            f"/chat/completions?api-version={self._api_version}"
        )

    def _auth_headers(self) -> dict[str, str]:
        if self._api_key.startswith("Bearer "):
            return {"Authorization": self._api_key}
        return {"api-key": self._api_key}
