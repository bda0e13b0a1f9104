"""
Interface port pour les fournisseurs IA.

Définit le contrat commun aux clients OpenAI, OpenRouter et Azure OpenAI.
Le domaine n'échange avec l'IA que des identifiants de fichiers opaques
et des aperçus de contenu, jamais des chemins absolus.
"""

from abc import ABC, abstractmethod

from src.core.value_objects import (
    AnalysisRequest,
    ConfidenceScore,
    MatchResult,
    VerificationRequest,
)


class IAIProvider(ABC):
    """
    Interface d'un fournisseur IA capable d'apparier vidéos et sous-titres.

    Chaque appel correspond à exactement une requête de complétion
    (hors retry sur erreur réseau).
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Nom du modèle utilisé (enregistré dans le cache)."""
        ...

    @abstractmethod
    async def analyze_content(self, request: AnalysisRequest) -> MatchResult:
        """
        Demande à l'IA d'apparier les vidéos et sous-titres décrits.

        Args :
            request : Descripteurs des fichiers et aperçus de contenu

        Retourne :
            MatchResult complet, jamais partiellement rempli

        Raises :
            AINetworkError, AIProviderError, AIResponseParseError
        """
        ...

    @abstractmethod
    async def verify_match(self, request: VerificationRequest) -> ConfidenceScore:
        """
        Demande à l'IA d'évaluer la confiance d'un appariement.

        Args :
            request : Vidéo, sous-titre et facteurs à évaluer

        Retourne :
            ConfidenceScore entre 0.0 et 1.0
        """
        ...

    async def close(self) -> None:
        """Libère les ressources réseau (rien par défaut)."""
        return None
