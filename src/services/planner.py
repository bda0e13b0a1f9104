"""
Planification des operations sur les sous-titres.

Transforme la liste brute d'appariements proposee par l'IA en une liste
d'operations sans conflit :

1. Filtrage : confiance sous le seuil ou identifiant non resolu -> ignore
2. Nom cible : nom de la video (sans extension) + extension du sous-titre,
   dans le repertoire de la video (copie, deplacement) ou dans celui du
   sous-titre (renommage sur place)
3. Resolution des conflits (AutoRename) : passe sequentielle dans l'ordre
   de decouverte des sous-titres. Un nom deja present sur le disque ou
   deja reserve par une operation precedente recoit un suffixe numerique
   (.1, .2, ...) qui reprend apres le plus grand suffixe existant ou reserve.
   Un fichier existant n'est jamais ecrase.
"""

import os
import re
from pathlib import Path
from typing import Callable, Iterable

from loguru import logger

from src.core.entities import MediaFile
from src.core.value_objects import (
    FileMatch,
    MatchOperation,
    MatchPlan,
    MatchResult,
    RelocationMode,
    SkippedSubtitle,
)
from src.services.file_id import is_file_id

# Raisons d'exclusion visibles par l'utilisateur
REASON_NO_VIDEO_FILES = "no video files found in directory"
REASON_NO_MATCH = "no matching video"
REASON_ALREADY_NAMED = "already named after its video"

SINGLE_PAIR_FACTOR = "single_pair_in_directory"


def _list_directory(directory: Path) -> set[str]:
    try:
        return set(os.listdir(directory))
    except OSError:
        return set()


def skip_all(subtitles: Iterable[MediaFile], reason: str) -> MatchPlan:
    """Plan vide ou chaque sous-titre est ignore avec la meme raison."""
    return MatchPlan(
        skipped=[SkippedSubtitle(subtitle_path=s.path, reason=reason) for s in subtitles]
    )


class MatchPlanner:
    """
    Convertit un MatchResult en operations ordonnees et sans conflit.

    La passe de resolution est strictement sequentielle : l'ensemble des
    chemins reserves est complet avant toute execution concurrente.
    """

    def __init__(self, list_directory: Callable[[Path], set[str]] = _list_directory) -> None:
        self._list_directory = list_directory

    def plan(
        self,
        match_result: MatchResult,
        threshold_percent: int,
        files: list[MediaFile],
        mode: RelocationMode = RelocationMode.RENAME,
    ) -> MatchPlan:
        """
        Construit le plan d'operations.

        Args:
            match_result: Reponse de l'IA
            threshold_percent: Seuil de confiance (0-100)
            files: Fichiers decouverts (l'ordre fait foi)
            mode: Mode de relocalisation

        Returns:
            MatchPlan avec operations et sous-titres ignores
        """
        threshold = threshold_percent / 100
        by_id = {f.id: f for f in files}
        videos = [f for f in files if f.is_video]
        subtitles = [f for f in files if f.is_subtitle]

        if not videos:
            return skip_all(subtitles, REASON_NO_VIDEO_FILES)

        accepted: dict[str, tuple[FileMatch, MediaFile]] = {}
        rejected: dict[str, float] = {}
        for match in match_result.matches:
            if not (is_file_id(match.video_file_id) and is_file_id(match.subtitle_file_id)):
                logger.debug(
                    "Appariement ignore: identifiant mal forme",
                    video_id=match.video_file_id,
                    subtitle_id=match.subtitle_file_id,
                )
                continue
            video = by_id.get(match.video_file_id)
            subtitle = by_id.get(match.subtitle_file_id)
            if video is None or subtitle is None or not video.is_video or not subtitle.is_subtitle:
                logger.debug(
                    "Appariement ignore: identifiant non resolu",
                    video_id=match.video_file_id,
                    subtitle_id=match.subtitle_file_id,
                )
                continue
            if match.confidence < threshold:
                rejected[subtitle.id] = max(match.confidence, rejected.get(subtitle.id, 0.0))
                continue
            current = accepted.get(subtitle.id)
            if current is None or match.confidence > current[0].confidence:
                accepted[subtitle.id] = (match, video)

        if len(videos) == 1 and len(subtitles) == 1 and not accepted:
            accepted[subtitles[0].id] = (
                self._single_pair_match(match_result, videos[0], subtitles[0]),
                videos[0],
            )

        plan = MatchPlan()
        claimed: set[Path] = set()
        listings: dict[Path, set[str]] = {}
        for subtitle in subtitles:
            if subtitle.id not in accepted:
                if subtitle.id in rejected:
                    reason = (
                        f"confidence {rejected[subtitle.id]:.2f} "
                        f"below threshold {threshold:.2f}"
                    )
                else:
                    reason = REASON_NO_MATCH
                plan.skipped.append(SkippedSubtitle(subtitle_path=subtitle.path, reason=reason))
                continue

            match, video = accepted[subtitle.id]
            if mode is RelocationMode.RENAME:
                target_dir = subtitle.path.parent
            else:
                target_dir = video.path.parent
            desired = target_dir / f"{video.stem}{subtitle.path.suffix}"

            if target_dir not in listings:
                listings[target_dir] = self._list_directory(target_dir)
            target = self._resolve_conflict(desired, subtitle.path, claimed, listings[target_dir])

            if target == subtitle.path:
                plan.skipped.append(
                    SkippedSubtitle(subtitle_path=subtitle.path, reason=REASON_ALREADY_NAMED)
                )
                continue

            claimed.add(target)
            plan.operations.append(
                MatchOperation(
                    subtitle_path=subtitle.path,
                    target_path=target,
                    video_path=video.path,
                    mode=mode,
                    confidence=match.confidence,
                    reasoning=match.match_factors,
                )
            )

        logger.info(
            "Plan construit",
            operations=len(plan.operations),
            skipped=len(plan.skipped),
            threshold=threshold,
        )
        return plan

    @staticmethod
    def _single_pair_match(
        match_result: MatchResult, video: MediaFile, subtitle: MediaFile
    ) -> FileMatch:
        """Appariement force pour un repertoire a une seule video et un seul sous-titre."""
        confidence = 1.0
        for match in match_result.matches:
            if match.video_file_id == video.id and match.subtitle_file_id == subtitle.id:
                confidence = match.confidence
                break
        return FileMatch(
            video_file_id=video.id,
            subtitle_file_id=subtitle.id,
            confidence=confidence,
            match_factors=(SINGLE_PAIR_FACTOR,),
        )

    @staticmethod
    def _resolve_conflict(
        desired: Path, source: Path, claimed: set[Path], on_disk: set[str]
    ) -> Path:
        """
        Retourne `desired` s'il est libre, sinon le prochain nom suffixe libre.

        Le sous-titre source ne compte pas comme conflit : s'il porte deja
        le nom voulu, l'operation devient un no-op.
        """
        if desired == source:
            return source

        existing = set(on_disk)
        if source.parent == desired.parent:
            existing.discard(source.name)

        if desired not in claimed and desired.name not in existing:
            return desired

        base, extension = desired.stem, desired.suffix
        pattern = re.compile(re.escape(base) + r"\.(\d+)" + re.escape(extension))
        taken = existing | {p.name for p in claimed if p.parent == desired.parent}
        highest = 0
        for name in taken:
            found = pattern.fullmatch(name)
            if found:
                highest = max(highest, int(found.group(1)))

        candidate = desired.with_name(f"{base}.{highest + 1}{extension}")
        if candidate == source:
            return source
        return candidate
