"""
Service d'appariement : orchestre decouverte, IA, planification, cache et relocalisation.

Pour chaque repertoire :
1. Decouverte des fichiers (recursive ou non)
2. Court-circuit sans appel IA : aucun sous-titre, ou aucune video
3. Consultation du cache de dry-run (snapshot + empreinte de configuration)
4. Sinon : UN appel IA pour tout le repertoire, planification, sauvegarde du plan
5. Execution (ou simulation) via le relocalisateur

Les erreurs de decouverte, d'IA ou de planification interrompent le run
avant toute modification. Les erreurs de relocalisation sont isolees par
fichier.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from loguru import logger

from src.core.entities import MediaFile
from src.core.exceptions import DiscoveryError
from src.core.ports.ai_provider import IAIProvider
from src.core.value_objects import (
    AnalysisRequest,
    ContentSample,
    MatchPlan,
    RelocationMode,
    RelocationResult,
    SkippedSubtitle,
)
from src.services.discovery import FileDiscoveryService
from src.services.match_cache import DryRunCache, build_snapshot, compute_config_hash
from src.services.planner import REASON_NO_MATCH, REASON_NO_VIDEO_FILES, MatchPlanner, skip_all
from src.services.relocator import RelocatorService

if TYPE_CHECKING:
    from src.config import Settings

# Nombre de lignes lues pour l'apercu d'un sous-titre
PREVIEW_LINES = 20

# Formats texte dont le contenu peut etre montre a l'IA (.sub/.idx sont binaires)
TEXT_SUBTITLE_EXTENSIONS: frozenset[str] = frozenset({"srt", "ass", "ssa", "vtt"})


@dataclass
class MatchRequest:
    """Parametres d'une commande match."""

    paths: list[Path]
    recursive: bool = False
    confidence: int = 80
    mode: RelocationMode = RelocationMode.RENAME
    backup: bool = False
    dry_run: bool = False


@dataclass
class MatchReport:
    """Bilan d'un repertoire traite."""

    directory: Path
    dry_run: bool
    plan: MatchPlan = field(default_factory=MatchPlan)
    results: list[RelocationResult] = field(default_factory=list)
    from_cache: bool = False
    ai_called: bool = False

    @property
    def failures(self) -> list[RelocationResult]:
        return [r for r in self.results if not r.success]


def read_content_preview(path: Path, max_length: int) -> str:
    """
    Premieres lignes d'un sous-titre, tronquees a max_length caracteres.

    Un texte tronque se termine par "...".
    """
    lines = []
    with open(path, encoding="utf-8", errors="replace") as f:
        for _ in range(PREVIEW_LINES):
            line = f.readline()
            if not line:
                break
            lines.append(line.rstrip("\r\n"))
    preview = "\n".join(lines)
    if len(preview) > max_length:
        preview = preview[:max_length] + "..."
    return preview


def group_inputs(paths: list[Path]) -> list[tuple[Path, Optional[list[Path]]]]:
    """
    Regroupe les chemins d'entree par repertoire.

    Un repertoire est scanne en entier (None), des fichiers explicites sont
    regroupes par repertoire parent. L'ordre de premiere apparition est conserve.

    Raises:
        DiscoveryError: Chemin introuvable
    """
    groups: dict[Path, Optional[list[Path]]] = {}
    for raw in paths:
        path = Path(raw).expanduser().absolute()
        if not path.exists():
            raise DiscoveryError(path, "path not found")
        if path.is_dir():
            groups[path] = None
            continue
        parent = path.parent
        if parent in groups and groups[parent] is None:
            continue
        groups.setdefault(parent, []).append(path)
    return list(groups.items())


class MatchService:
    """
    Cas d'utilisation "match".

    Le client IA est cree paresseusement : un plan rejoue depuis le cache
    ou un repertoire sans video ne necessite aucune cle API.
    """

    def __init__(
        self,
        discovery: FileDiscoveryService,
        planner: MatchPlanner,
        cache: DryRunCache,
        relocator: RelocatorService,
        settings: "Settings",
        ai_client_factory: Callable[[], IAIProvider],
    ) -> None:
        self._discovery = discovery
        self._planner = planner
        self._cache = cache
        self._relocator = relocator
        self._settings = settings
        self._ai_client_factory = ai_client_factory
        self._ai_client: Optional[IAIProvider] = None

    def _get_ai_client(self) -> IAIProvider:
        if self._ai_client is None:
            self._ai_client = self._ai_client_factory()
        return self._ai_client

    async def run(self, request: MatchRequest) -> list[MatchReport]:
        """Traite chaque repertoire (ou groupe de fichiers) de la requete."""
        groups = group_inputs(request.paths)
        reports = []
        try:
            for directory, only in groups:
                reports.append(await self.match_directory(directory, request, only))
        finally:
            if self._ai_client is not None:
                await self._ai_client.close()
                self._ai_client = None
        return reports

    async def match_directory(
        self,
        directory: Path,
        request: MatchRequest,
        only: Optional[list[Path]] = None,
    ) -> MatchReport:
        """Decouverte, plan (cache ou IA) puis execution pour un repertoire."""
        directory = Path(directory).expanduser().absolute()
        recursive = request.recursive and only is None
        if only is None:
            files = self._discovery.scan_directory(directory, recursive=recursive)
        else:
            files = self._discovery.scan_files(only, root=directory)

        videos = [f for f in files if f.is_video]
        subtitles = [f for f in files if f.is_subtitle]
        report = MatchReport(directory=directory, dry_run=request.dry_run)
        logger.info(
            "Repertoire decouvert",
            directory=str(directory),
            videos=len(videos),
            subtitles=len(subtitles),
        )

        if not subtitles:
            return report
        if not videos:
            report.plan = skip_all(subtitles, REASON_NO_VIDEO_FILES)
            return report

        snapshot = build_snapshot(files)
        config_hash = compute_config_hash(
            self._settings, recursive, request.confidence, request.mode
        )
        cached = self._cache.lookup(directory, snapshot, config_hash)

        if cached is not None:
            planned_sources = {op.subtitle_path for op in cached}
            report.plan = MatchPlan(
                operations=cached,
                skipped=[
                    SkippedSubtitle(subtitle_path=s.path, reason=REASON_NO_MATCH)
                    for s in subtitles
                    if s.path not in planned_sources
                ],
            )
            report.from_cache = True
        else:
            client = self._get_ai_client()
            analysis = self.build_analysis_request(videos, subtitles)
            match_result = await client.analyze_content(analysis)
            report.ai_called = True
            report.plan = self._planner.plan(
                match_result, request.confidence, files, request.mode
            )
            try:
                self._cache.store(
                    directory, snapshot, config_hash, client.model, report.plan.operations
                )
            except OSError as e:
                logger.warning(
                    "Impossible d'ecrire le cache",
                    cache_file=str(self._cache.cache_file),
                    error=str(e),
                )

        report.results = await self._relocator.execute(
            report.plan.operations, dry_run=request.dry_run, backup=request.backup or None
        )
        return report

    def build_analysis_request(
        self, videos: list[MediaFile], subtitles: list[MediaFile]
    ) -> AnalysisRequest:
        """Descripteurs identifies et apercus de contenu des sous-titres texte."""
        max_length = self._settings.ai_max_sample_length
        samples = []
        if max_length > 0:
            for subtitle in subtitles:
                if subtitle.extension not in TEXT_SUBTITLE_EXTENSIONS:
                    continue
                try:
                    preview = read_content_preview(subtitle.path, max_length)
                except OSError as e:
                    logger.warning(
                        "Apercu de sous-titre illisible", file=subtitle.name, error=str(e)
                    )
                    continue
                samples.append(
                    ContentSample(
                        filename=subtitle.name,
                        content_preview=preview,
                        file_size=subtitle.size,
                    )
                )
        return AnalysisRequest(
            video_files=tuple(v.descriptor() for v in videos),
            subtitle_files=tuple(s.descriptor() for s in subtitles),
            content_samples=tuple(samples),
        )
