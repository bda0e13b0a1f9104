"""
Exceptions du domaine subpair.

Hiérarchie :
- SubpairError : base de toutes les erreurs applicatives
  - DiscoveryError : répertoire introuvable ou illisible
  - AIServiceError : échecs liés au service IA
    - AIConfigurationError / MissingAPIKeyError : client impossible à construire
    - AINetworkError : erreurs réseau persistantes après retry
    - AIProviderError : réponse HTTP non-2xx du fournisseur
    - AIResponseParseError : réponse illisible ou de forme inattendue

Les échecs de relocalisation ne sont pas des exceptions : ils sont
rapportés par opération (voir RelocationResult).
"""

from pathlib import Path
from typing import Optional

# Longueur maximale des extraits de réponse conservés dans les erreurs
EXCERPT_LENGTH = 500


def excerpt(text: str, length: int = EXCERPT_LENGTH) -> str:
    """Tronque un texte pour l'inclure dans un message d'erreur."""
    if len(text) <= length:
        return text
    return text[:length] + "..."


class SubpairError(Exception):
    """Erreur de base de l'application."""


class DiscoveryError(SubpairError):
    """
    Erreur levée quand un répertoire ne peut pas être parcouru.

    Attributes:
        path: Chemin en cause
        reason: Raison lisible (introuvable, permission refusée...)
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class AIServiceError(SubpairError):
    """Erreur de base du service IA."""


class AIConfigurationError(AIServiceError):
    """Configuration du fournisseur IA invalide (URL, déploiement, fournisseur)."""


class MissingAPIKeyError(AIConfigurationError):
    """Aucune clé API configurée pour le fournisseur IA."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(
            f"Cle API manquante pour le fournisseur '{provider}' "
            "(definir SUBPAIR_AI_API_KEY)"
        )


class AINetworkError(AIServiceError):
    """
    Erreur réseau persistante (timeout, connexion, DNS) après épuisement des tentatives.

    Attributes:
        attempts: Nombre de tentatives effectuées
        cause: Dernière exception transport rencontrée
    """

    def __init__(self, attempts: int, cause: Optional[BaseException] = None) -> None:
        self.attempts = attempts
        self.cause = cause
        super().__init__(f"Erreur reseau apres {attempts} tentative(s): {cause}")


class AIProviderError(AIServiceError):
    """
    Le fournisseur a répondu avec un statut non-2xx.

    Attributes:
        status_code: Statut HTTP reçu
        body_excerpt: Début du corps de la réponse
        provider: Nom du fournisseur
    """

    def __init__(self, status_code: int, body: str, provider: str = "") -> None:
        self.status_code = status_code
        self.body_excerpt = excerpt(body)
        self.provider = provider
        super().__init__(
            f"Le fournisseur {provider or 'IA'} a repondu {status_code}: {self.body_excerpt}"
        )


class AIResponseParseError(AIServiceError):
    """
    Réponse du fournisseur impossible à interpréter.

    Attributes:
        excerpt: Extrait (tronqué) de la réponse brute
    """

    def __init__(self, message: str, raw: str = "") -> None:
        self.excerpt = excerpt(raw)
        detail = f" (reponse: {self.excerpt!r})" if raw else ""
        super().__init__(f"{message}{detail}")
