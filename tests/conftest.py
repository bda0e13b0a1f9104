"""
Fixtures pytest partagees pour les tests subpair.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Fournisseur IA factice (voir tests/fixtures/fake_ai.py)
- Constructeur d'arborescences de fichiers media
- MatchService reel autour d'un fournisseur IA donne
- Mock de IFileSystem
"""

from pathlib import Path
from typing import Callable, Optional
from unittest.mock import MagicMock

import pytest

from src.adapters.file_system import FileSystemAdapter
from src.adapters.worker_pool import AsyncioWorkerPool
from src.config import Settings
from src.core.ports.ai_provider import IAIProvider
from src.core.ports.file_system import IFileSystem
from src.services.discovery import FileDiscoveryService
from src.services.match_cache import DryRunCache
from src.services.match_service import MatchService
from src.services.planner import MatchPlanner
from src.services.relocator import RelocatorService
from tests.fixtures.fake_ai import FakeAIProvider


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Le fichier .env du projet est ignore pour isoler chaque test.
    """
    return Settings(
        _env_file=None,
        ai_api_key="test-key",
        ai_model="gpt-test",
        ai_retry_attempts=3,
        ai_retry_delay_ms=1,
        ai_retry_max_delay_ms=5,
        cache_file=tmp_path / "cache" / "match_cache.json",
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def fake_ai() -> FakeAIProvider:
    """Fournisseur IA factice appariant par prefixe de nom."""
    return FakeAIProvider()


@pytest.fixture
def make_files(tmp_path: Path) -> Callable[..., Path]:
    """
    Cree des fichiers sous tmp_path/<base>.

    Usage:
        root = make_files({"movie.mkv": "", "subs/movie.srt": "1\\n..."})
    """

    def _make(files: dict[str, str], base: str = "media") -> Path:
        root = tmp_path / base
        root.mkdir(parents=True, exist_ok=True)
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def match_service_factory(test_settings: Settings) -> Callable[..., MatchService]:
    """Construit un MatchService reel (fichiers, cache, pool) autour d'un fournisseur IA."""

    def _build(ai: IAIProvider, settings: Optional[Settings] = None) -> MatchService:
        settings = settings or test_settings
        relocator = RelocatorService(
            file_system=FileSystemAdapter(),
            worker_pool=AsyncioWorkerPool(max_workers=2),
            backup_enabled=settings.backup_enabled,
        )
        return MatchService(
            discovery=FileDiscoveryService(),
            planner=MatchPlanner(),
            cache=DryRunCache(settings.cache_file),
            relocator=relocator,
            settings=settings,
            ai_client_factory=lambda: ai,
        )

    return _build


@pytest.fixture
def mock_file_system() -> MagicMock:
    """
    Mock de IFileSystem pour les tests.

    Les sources existent, les cibles (nom contenant "target") sont libres.
    """
    mock = MagicMock(spec=IFileSystem)
    mock.exists.side_effect = lambda path: "target" not in path.name
    mock.backup.side_effect = lambda path: path.with_name(path.name + ".backup")
    return mock
