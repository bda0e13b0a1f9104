"""
Client OpenAI (et API compatibles OpenAI).

Usage:
    client = OpenAIClient(api_key="sk-...", model="gpt-4.1-mini")
    result = await client.analyze_content(request)
    await client.close()
"""

from src.adapters.ai.base_client import BaseChatClient


class OpenAIClient(BaseChatClient):
    """Endpoint {base_url}/chat/completions, authentification Bearer."""

    provider_name = "openai"
    DEFAULT_BASE_URL = "https://api.openai.com/v1"

    def __init__(self, api_key: str, model: str, base_url: str = DEFAULT_BASE_URL, **kwargs) -> None:
        super().__init__(api_key=api_key, model=model, base_url=base_url, **kwargs)

    def _endpoint_url(self) -> str:
        return f"{self._base_url}/chat/completions"

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}
