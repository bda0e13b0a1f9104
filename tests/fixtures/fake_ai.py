"""
Fournisseur IA factice pour les tests de service et d'integration.

FakeAIProvider compte ses appels et, par defaut, apparie un sous-titre avec
la video dont le nom (sans extension) prefixe celui du sous-titre.
"""

from typing import Callable, Optional

from src.core.ports.ai_provider import IAIProvider
from src.core.value_objects import (
    AnalysisRequest,
    ConfidenceScore,
    FileMatch,
    MatchResult,
    VerificationRequest,
)


def parse_descriptor(descriptor: str) -> dict[str, str]:
    """Decoupe "ID:x | Name:y | Path:z" en dictionnaire."""
    return dict(part.split(":", 1) for part in descriptor.split(" | "))


def match_by_name(request: AnalysisRequest, confidence: float = 0.95) -> MatchResult:
    """Appariement par prefixe de nom de fichier."""
    videos = [parse_descriptor(v) for v in request.video_files]
    matches = []
    for descriptor in request.subtitle_files:
        subtitle = parse_descriptor(descriptor)
        for video in videos:
            stem = video["Name"].rsplit(".", 1)[0]
            if subtitle["Name"].startswith(stem):
                matches.append(
                    FileMatch(
                        video_file_id=video["ID"],
                        subtitle_file_id=subtitle["ID"],
                        confidence=confidence,
                        match_factors=("filename_similarity",),
                    )
                )
                break
    return MatchResult(matches=tuple(matches), confidence=confidence, reasoning="name prefix")


def no_match(request: AnalysisRequest) -> MatchResult:
    """L'IA ne propose aucun appariement."""
    return MatchResult(matches=(), confidence=0.0, reasoning="nothing similar")


class FakeAIProvider(IAIProvider):
    """Fournisseur IA en memoire qui compte ses appels."""

    def __init__(
        self,
        responder: Optional[Callable[[AnalysisRequest], MatchResult]] = None,
        score: float = 0.9,
    ) -> None:
        self._responder = responder or match_by_name
        self._score = score
        self.analyze_calls: list[AnalysisRequest] = []
        self.verify_calls: list[VerificationRequest] = []
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def analyze_content(self, request: AnalysisRequest) -> MatchResult:
        self.analyze_calls.append(request)
        return self._responder(request)

    async def verify_match(self, request: VerificationRequest) -> ConfidenceScore:
        self.verify_calls.append(request)
        return ConfidenceScore(score=self._score, factors=("fake",))

    async def close(self) -> None:
        self.closed = True
