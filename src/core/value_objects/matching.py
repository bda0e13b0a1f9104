"""
Objets valeur de l'appariement vidéo / sous-titre.

Regroupe :
- les requêtes et réponses échangées avec le fournisseur IA
- les opérations planifiées (renommage, copie, déplacement)
- les résultats d'exécution de ces opérations
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


# ============================================================================
# Protocole IA
# ============================================================================


@dataclass(frozen=True)
class ContentSample:
    """Aperçu du contenu d'un sous-titre (premières lignes, tronquées)."""

    filename: str
    content_preview: str
    file_size: int


@dataclass(frozen=True)
class AnalysisRequest:
    """
    Requête d'analyse envoyée au fournisseur IA.

    Attributs :
        video_files : Descripteurs "ID:<id> | Name:<nom> | Path:<chemin relatif>"
        subtitle_files : Descripteurs des sous-titres, même format
        content_samples : Aperçus optionnels du contenu des sous-titres
    """

    video_files: tuple[str, ...]
    subtitle_files: tuple[str, ...]
    content_samples: tuple[ContentSample, ...] = ()


@dataclass(frozen=True)
class FileMatch:
    """Association proposée par l'IA entre une vidéo et un sous-titre."""

    video_file_id: str
    subtitle_file_id: str
    confidence: float
    match_factors: tuple[str, ...] = ()


@dataclass(frozen=True)
class MatchResult:
    """Réponse complète d'une analyse IA."""

    matches: tuple[FileMatch, ...]
    confidence: float
    reasoning: str


@dataclass(frozen=True)
class VerificationRequest:
    """Demande d'évaluation de la confiance d'un appariement précis."""

    video_file: str
    subtitle_file: str
    match_factors: tuple[str, ...] = ()


@dataclass(frozen=True)
class ConfidenceScore:
    """Score de confiance (0.0-1.0) avec les facteurs retenus."""

    score: float
    factors: tuple[str, ...] = ()


@dataclass(frozen=True)
class AIUsageStats:
    """Consommation de tokens d'un appel au fournisseur."""

    model: str
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


# ============================================================================
# Planification et relocalisation
# ============================================================================


class RelocationMode(Enum):
    """Mode de relocalisation d'un sous-titre."""

    RENAME = "rename"
    COPY = "copy"
    MOVE = "move"


@dataclass(frozen=True)
class MatchOperation:
    """
    Opération planifiée sur un sous-titre.

    Attributs :
        subtitle_path : Chemin actuel du sous-titre
        target_path : Chemin final (nom aligné sur la vidéo)
        video_path : Vidéo associée
        mode : Renommage sur place, copie ou déplacement vers la vidéo
        confidence : Confiance de l'appariement (0.0-1.0)
        reasoning : Facteurs ayant justifié l'appariement
    """

    subtitle_path: Path
    target_path: Path
    video_path: Path
    mode: RelocationMode
    confidence: float
    reasoning: tuple[str, ...] = ()

    @property
    def subtitle_name(self) -> str:
        return self.subtitle_path.name

    @property
    def target_name(self) -> str:
        return self.target_path.name


@dataclass(frozen=True)
class SkippedSubtitle:
    """Sous-titre laissé de côté, avec la raison."""

    subtitle_path: Path
    reason: str


@dataclass
class MatchPlan:
    """Résultat de la planification : opérations et sous-titres ignorés."""

    operations: list[MatchOperation] = field(default_factory=list)
    skipped: list[SkippedSubtitle] = field(default_factory=list)


@dataclass(frozen=True)
class RelocationResult:
    """
    Résultat de l'exécution (ou de la simulation) d'une opération.

    Un échec n'interrompt jamais les autres opérations : il est
    rapporté ici avec la raison dans `error`.
    """

    operation: MatchOperation
    success: bool
    dry_run: bool = False
    message: str = ""
    error: Optional[str] = None
