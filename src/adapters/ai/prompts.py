"""
Construction des prompts et interpretation des reponses du fournisseur IA.

Le modele peut entourer son JSON de prose : on extrait le premier objet
JSON equilibre present dans le texte (les accolades a l'interieur des
chaines JSON ne comptent pas), puis on valide sa forme avec pydantic.
Une reponse mal formee leve AIResponseParseError avec un extrait, jamais
un resultat partiel.
"""

import json
from typing import Annotated, Iterator

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from src.core.exceptions import AIResponseParseError
from src.core.value_objects import (
    AnalysisRequest,
    ConfidenceScore,
    FileMatch,
    MatchResult,
    VerificationRequest,
)

ANALYSIS_SYSTEM_PROMPT = (
    "You are a professional subtitle matching assistant that can analyze "
    "the correspondence between video and subtitle files."
)

VERIFICATION_SYSTEM_PROMPT = (
    "Please evaluate the confidence level of subtitle matching and provide "
    "a score between 0-1."
)

_ANALYSIS_RESPONSE_FORMAT = """\
Please provide matching suggestions based on filename patterns, content similarity, and other factors.
Response format must be JSON using the file IDs:
{
  "matches": [
    {
      "video_file_id": "file_abc123456789abcd",
      "subtitle_file_id": "file_def456789abcdef0",
      "confidence": 0.95,
      "match_factors": ["filename_similarity", "content_correlation"]
    }
  ],
  "confidence": 0.9,
  "reasoning": "Explanation for the matching decisions"
}"""

_VERIFICATION_RESPONSE_FORMAT = """
Please respond in JSON format as follows:
{
  "score": 0.9,
  "factors": ["..."]
}"""

Confidence = Annotated[float, Field(strict=True, ge=0.0, le=1.0)]


# ============================================================================
# Prompts
# ============================================================================


def build_analysis_prompt(request: AnalysisRequest) -> str:
    """Prompt d'appariement : listes de fichiers identifies et apercus de contenu."""
    lines = [
        "Please analyze the matching relationship between the following video "
        "and subtitle files. Each file has a unique ID that you must use in your response.",
        "",
        "Video files:",
    ]
    lines.extend(f"- {video}" for video in request.video_files)
    lines.append("")
    lines.append("Subtitle files:")
    lines.extend(f"- {subtitle}" for subtitle in request.subtitle_files)

    if request.content_samples:
        lines.append("")
        lines.append("Subtitle content preview:")
        for sample in request.content_samples:
            lines.append(f"File: {sample.filename}")
            lines.append(f"Content: {sample.content_preview}")
            lines.append("")

    lines.append("")
    return "\n".join(lines) + _ANALYSIS_RESPONSE_FORMAT


def build_verification_prompt(request: VerificationRequest) -> str:
    """Prompt de verification d'un appariement unique."""
    lines = [
        "Please evaluate the confidence level based on the following matching information:",
        f"Video file: {request.video_file}",
        f"Subtitle file: {request.subtitle_file}",
        "Matching factors:",
    ]
    lines.extend(f"- {factor}" for factor in request.match_factors)
    return "\n".join(lines) + "\n" + _VERIFICATION_RESPONSE_FORMAT


# ============================================================================
# Extraction JSON
# ============================================================================


def _scan_objects(text: str, begin: int) -> tuple[list[tuple[int, int]], list[int], list[int]]:
    """
    Parcourt le texte une seule fois a partir de `begin`.

    Retourne les couples (ouvrante, fermante) equilibres, les positions des
    accolades ouvrantes vues hors chaine et celles masquees par une chaine.
    Hors de toute accolade, les guillemets sont de la prose et ne sont pas
    suivis.
    """
    spans = []
    opened = []
    masked = []
    stack: list[int] = []
    in_string = False
    escaped = False
    for index in range(begin, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            elif char == "{":
                masked.append(index)
            continue
        if char == "{":
            stack.append(index)
            opened.append(index)
        elif not stack:
            continue
        elif char == '"':
            in_string = True
        elif char == "}":
            spans.append((stack.pop(), index))
    return spans, opened, masked


def iter_balanced_objects(text: str) -> Iterator[str]:
    """
    Enumere les sous-chaines {...} equilibrees, dans l'ordre d'apparition.

    Chaque accolade ouvrante est evaluee comme si l'analyse commencait a
    cet endroit. Une passe couvre toutes les accolades vues hors chaine ;
    une nouvelle passe ne repart que d'une accolade masquee jusque-la par
    un guillemet de prose.
    """
    spans: set[tuple[int, int]] = set()
    covered: set[int] = set()
    begin = text.find("{")
    while begin != -1:
        found, opened, masked = _scan_objects(text, begin)
        spans.update(found)
        covered.update(opened)
        begin = next((index for index in masked if index not in covered), -1)
    for start, end in sorted(spans):
        yield text[start : end + 1]


def extract_json_object(text: str) -> dict:
    """
    Retourne le premier objet JSON equilibre et decodable trouve dans le texte.

    Raises:
        AIResponseParseError: Si aucun objet JSON valide n'est present
    """
    for candidate in iter_balanced_objects(text):
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(value, dict):
            return value
    raise AIResponseParseError("Aucun objet JSON trouve dans la reponse IA", text)


# ============================================================================
# Schemas de reponse
# ============================================================================


class _FileMatchPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    video_file_id: StrictStr
    subtitle_file_id: StrictStr
    confidence: Confidence
    match_factors: list[StrictStr] = Field(default_factory=list)


class _MatchResultPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    matches: list[_FileMatchPayload]
    confidence: Confidence
    reasoning: StrictStr


class _ConfidencePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    score: Confidence
    factors: list[StrictStr] = Field(default_factory=list)


def parse_match_result(text: str) -> MatchResult:
    """
    Interprete la reponse d'analyse.

    Raises:
        AIResponseParseError: JSON absent ou de forme inattendue
    """
    data = extract_json_object(text)
    try:
        payload = _MatchResultPayload.model_validate(data)
    except ValidationError as e:
        raise AIResponseParseError(
            f"Reponse d'analyse invalide ({e.error_count()} erreur(s))", text
        ) from e

    return MatchResult(
        matches=tuple(
            FileMatch(
                video_file_id=m.video_file_id,
                subtitle_file_id=m.subtitle_file_id,
                confidence=float(m.confidence),
                match_factors=tuple(m.match_factors),
            )
            for m in payload.matches
        ),
        confidence=float(payload.confidence),
        reasoning=payload.reasoning,
    )


def parse_confidence_score(text: str) -> ConfidenceScore:
    """
    Interprete la reponse de verification.

    Raises:
        AIResponseParseError: JSON absent ou de forme inattendue
    """
    data = extract_json_object(text)
    try:
        payload = _ConfidencePayload.model_validate(data)
    except ValidationError as e:
        raise AIResponseParseError(
            f"Reponse de verification invalide ({e.error_count()} erreur(s))", text
        ) from e
    return ConfidenceScore(score=float(payload.score), factors=tuple(payload.factors))
