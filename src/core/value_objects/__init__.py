"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- ContentSample, AnalysisRequest, VerificationRequest : requetes vers l'IA
- FileMatch, MatchResult, ConfidenceScore, AIUsageStats : reponses de l'IA
- RelocationMode, MatchOperation, SkippedSubtitle, MatchPlan : planification
- RelocationResult : resultat d'execution d'une operation
"""

from src.core.value_objects.matching import (
    AIUsageStats,
    AnalysisRequest,
    ConfidenceScore,
    ContentSample,
    FileMatch,
    MatchOperation,
    MatchPlan,
    MatchResult,
    RelocationMode,
    RelocationResult,
    SkippedSubtitle,
    VerificationRequest,
)

__all__ = [
    "AIUsageStats",
    "AnalysisRequest",
    "ConfidenceScore",
    "ContentSample",
    "FileMatch",
    "MatchOperation",
    "MatchPlan",
    "MatchResult",
    "RelocationMode",
    "RelocationResult",
    "SkippedSubtitle",
    "VerificationRequest",
]
