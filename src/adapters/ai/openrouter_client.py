"""
Client OpenRouter.

Meme contrat que l'API OpenAI, avec les en-tetes d'attribution
HTTP-Referer et X-Title demandes par OpenRouter.
"""

from src.adapters.ai.base_client import BaseChatClient

APP_REFERER = "https://github.com/subpair/subpair"
APP_TITLE = "subpair"


class OpenRouterClient(BaseChatClient):
    """Endpoint {base_url}/chat/completions, Bearer + en-tetes d'attribution."""

    provider_name = "openrouter"
    DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"

    def __init__(self, api_key: str, model: str, base_url: str = DEFAULT_BASE_URL, **kwargs) -> None:
        super().__init__(api_key=api_key, model=model, base_url=base_url, **kwargs)

    def _endpoint_url(self) -> str:
        return f"{self._base_url}/chat/completions"

    def _auth_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "HTTP-Referer": APP_REFERER,
            "X-Title": APP_TITLE,
        }
