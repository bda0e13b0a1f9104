"""
Client de base pour les API de completion compatibles OpenAI.

Partage le contrat requete/reponse entre les fournisseurs :
    POST {model, messages, temperature, max_tokens}
    -> {choices: [{message: {content}}], usage: {...}}

Les variantes (OpenAI, OpenRouter, Azure OpenAI) ne definissent que
l'URL de l'endpoint et les en-tetes d'authentification.
"""

import asyncio
from abc import abstractmethod
from typing import Any, Optional

import httpx
from loguru import logger

from src.adapters.ai.prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    VERIFICATION_SYSTEM_PROMPT,
    build_analysis_prompt,
    build_verification_prompt,
    parse_confidence_score,
    parse_match_result,
)
from src.adapters.ai.retry import RetryConfig, SleepFn, request_with_retry
from src.core.exceptions import (
    AIConfigurationError,
    AIProviderError,
    AIResponseParseError,
)
from src.core.ports.ai_provider import IAIProvider
from src.core.value_objects import (
    AIUsageStats,
    AnalysisRequest,
    ConfidenceScore,
    MatchResult,
    VerificationRequest,
)


def validate_base_url(url: str) -> str:
    """
    Valide une URL de base (schema http/https et hote present).

    Returns:
        L'URL sans slash final

    Raises:
        AIConfigurationError: URL invalide
    """
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise AIConfigurationError(f"URL de base invalide: {url!r} ({e})") from e
    if parsed.scheme not in ("http", "https"):
        raise AIConfigurationError(
            f"L'URL de base doit utiliser http ou https: {url!r}"
        )
    if not parsed.host:
        raise AIConfigurationError(f"L'URL de base doit contenir un hote: {url!r}")
    return url.rstrip("/")


class BaseChatClient(IAIProvider):
    """
    Client de completion partage par tous les fournisseurs.

    Gere :
    - le client httpx (creation paresseuse, timeout de requete)
    - le retry transport via request_with_retry
    - la conversion des statuts non-2xx en AIProviderError
    - l'extraction de choices[0].message.content
    - le suivi de la consommation de tokens (last_usage)
    """

    provider_name = "openai-compatible"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        temperature: float = 0.3,
        max_tokens: int = 10000,
        request_timeout: float = 120.0,
        retry_config: Optional[RetryConfig] = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = validate_base_url(base_url)
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._request_timeout = request_timeout
        self._retry_config = retry_config or RetryConfig()
        self._sleep = sleep
        self._client: Optional[httpx.AsyncClient] = None
        self.last_usage: Optional[AIUsageStats] = None

    @property
    def model(self) -> str:
        return self._model

    @property
    def base_url(self) -> str:
        return self._base_url

    @abstractmethod
    def _endpoint_url(self) -> str:
        """URL complete de l'endpoint de completion."""
        ...

    @abstractmethod
    def _auth_headers(self) -> dict[str, str]:
        """En-tetes d'authentification propres au fournisseur."""
        ...

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            headers = {"Content-Type": "application/json"}
            headers.update(self._auth_headers())
            self._client = httpx.AsyncClient(
                headers=headers,
                timeout=self._request_timeout,
            )
        return self._client

    async def chat_completion(self, messages: list[dict[str, str]]) -> str:
        """
        Envoie une conversation et retourne le texte de la reponse.

        Raises:
            AINetworkError: Erreurs transport persistantes
            AIProviderError: Statut HTTP non-2xx (jamais relance)
            AIResponseParseError: Enveloppe de reponse inattendue
        """
        payload = {
            "model": self._model,
            "messages": messages,
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }
        response = await request_with_retry(
            self._get_client(),
            "POST",
            self._endpoint_url(),
            self._retry_config,
            sleep=self._sleep,
            json=payload,
        )

        if not response.is_success:
            logger.error(
                "Reponse en erreur du fournisseur IA",
                provider=self.provider_name,
                status=response.status_code,
            )
            raise AIProviderError(response.status_code, response.text, self.provider_name)

        try:
            data = response.json()
        except ValueError as e:
            raise AIResponseParseError("Corps de reponse non JSON", response.text) from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise AIResponseParseError(
                "Enveloppe de reponse inattendue (choices[0].message.content)",
                response.text,
            ) from e
        if not isinstance(content, str):
            raise AIResponseParseError("Contenu de reponse non textuel", response.text)

        self._record_usage(data.get("usage"))
        return content

    def _record_usage(self, usage: Any) -> None:
        """Memorise et logge la consommation de tokens si fournie."""
        if not isinstance(usage, dict):
            return
        try:
            stats = AIUsageStats(
                model=self._model,
                prompt_tokens=int(usage.get("prompt_tokens") or 0),
                completion_tokens=int(usage.get("completion_tokens") or 0),
                total_tokens=int(usage.get("total_tokens") or 0),
            )
        except (TypeError, ValueError) as e:
            logger.debug("Usage IA inexploitable, ignore", provider=self.provider_name, error=str(e))
            return
        self.last_usage = stats
        logger.info(
            "Usage IA",
            provider=self.provider_name,
            model=self._model,
            prompt_tokens=self.last_usage.prompt_tokens,
            completion_tokens=self.last_usage.completion_tokens,
            total_tokens=self.last_usage.total_tokens,
        )

    async def analyze_content(self, request: AnalysisRequest) -> MatchResult:
        """Un appel de completion, puis parsing strict de la reponse."""
        logger.debug(
            "Analyse IA",
            videos=len(request.video_files),
            subtitles=len(request.subtitle_files),
        )
        messages = [
            {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
            {"role": "user", "content": build_analysis_prompt(request)},
        ]
        return parse_match_result(await self.chat_completion(messages))

    async def verify_match(self, request: VerificationRequest) -> ConfidenceScore:
        messages = [
            {"role": "system", "content": VERIFICATION_SYSTEM_PROMPT},
            {"role": "user", "content": build_verification_prompt(request)},
        ]
        return parse_confidence_score(await self.chat_completion(messages))

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
