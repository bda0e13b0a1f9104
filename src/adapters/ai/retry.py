"""
Mecanismes de retry avec backoff exponentiel pour le fournisseur IA.

Deux politiques distinctes et composables :
- request_with_retry : niveau transport, relance UNIQUEMENT les erreurs
  reseau (timeout, connexion, DNS). Toute reponse recue, meme non-2xx,
  est retournee immediatement sans consommer de tentative.
- retry_with_backoff : niveau operation, relance un appel complet
  (requete + parsing) quelle que soit l'erreur.

Les deux utilisent le meme delai :
    delay = min(base_delay * backoff_multiplier ** attempt, max_delay)
ou attempt vaut 0 pour l'attente qui suit le premier echec.

Usage:
    config = RetryConfig(max_attempts=3, base_delay=1.0)
    response = await request_with_retry(client, "POST", url, config, json=payload)
    result = await retry_with_backoff(lambda: provider.verify_match(req), config)
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
)

from src.core.exceptions import AINetworkError

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryConfig:
    """
    Politique de retry (valeur pure, sans etat).

    Attributes:
        max_attempts: Nombre total de tentatives (premiere incluse)
        base_delay: Delai avant la deuxieme tentative, en secondes
        max_delay: Plafond du delai, en secondes
        backoff_multiplier: Facteur multiplicatif entre deux attentes
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    backoff_multiplier: float = 2.0

    def delay_for(self, attempt: int) -> float:
        """Delai a observer apres l'echec numero `attempt` (0-indexe)."""
        try:
            delay = self.base_delay * (self.backoff_multiplier ** attempt)
        except OverflowError:
            return self.max_delay
        return min(delay, self.max_delay)


def backoff_wait(config: RetryConfig) -> Callable[[RetryCallState], float]:
    """Strategie d'attente tenacity basee sur RetryConfig.delay_for."""

    def _wait(retry_state: RetryCallState) -> float:
        return config.delay_for(retry_state.attempt_number - 1)

    return _wait


def _log_retry(retry_state: RetryCallState) -> None:
    """Log chaque nouvelle tentative avec la cause de l'echec."""
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Nouvelle tentative apres echec",
        attempt=retry_state.attempt_number,
        wait=retry_state.next_action.sleep if retry_state.next_action else None,
        error=repr(exc),
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    retry_config: RetryConfig | None = None,
    sleep: SleepFn = asyncio.sleep,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP en relancant seulement les erreurs transport.

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL a appeler
        retry_config: Politique de retry (defaut: RetryConfig())
        sleep: Fonction d'attente async (injectable pour les tests)
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        La reponse recue, quel que soit son statut

    Raises:
        AINetworkError: Si toutes les tentatives echouent au niveau transport
    """
    config = retry_config or RetryConfig()
    retrying = AsyncRetrying(
        retry=retry_if_exception_type(httpx.TransportError),
        wait=backoff_wait(config),
        stop=stop_after_attempt(config.max_attempts),
        sleep=sleep,
        before_sleep=_log_retry,
        reraise=True,
    )
    try:
        return await retrying(client.request, method, url, **kwargs)
    except httpx.TransportError as e:
        attempts = retrying.statistics.get("attempt_number", config.max_attempts)
        raise AINetworkError(attempts, e) from e


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    retry_config: RetryConfig | None = None,
    sleep: SleepFn = asyncio.sleep,
) -> T:
    """
    Relance une operation complete, quelle que soit l'erreur levee.

    Args:
        operation: Fabrique d'awaitable (appelee une fois par tentative)
        retry_config: Politique de retry (defaut: RetryConfig())
        sleep: Fonction d'attente async (injectable pour les tests)

    Returns:
        Le resultat de la premiere tentative reussie

    Raises:
        La derniere exception levee apres max_attempts tentatives
    """
    config = retry_config or RetryConfig()
    async for attempt in AsyncRetrying(
        retry=retry_if_exception_type(Exception),
        wait=backoff_wait(config),
        stop=stop_after_attempt(config.max_attempts),
        sleep=sleep,
        before_sleep=_log_retry,
        reraise=True,
    ):
        with attempt:
            result = await operation()
    return result
