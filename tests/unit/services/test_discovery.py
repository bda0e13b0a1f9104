"""
Tests unitaires pour FileDiscoveryService.

Tests couvrant:
- classify: classification par extension, insensible a la casse
- scan_directory: ordre deterministe, recursion optionnelle, chemins relatifs
- scan_files: listes explicites de fichiers
- Erreurs: repertoire introuvable, chemin qui n'est pas un repertoire
"""

from pathlib import Path

import pytest

from src.core.entities import MediaFileType
from src.core.exceptions import DiscoveryError
from src.services.discovery import FileDiscoveryService, classify
from src.services.file_id import generate_file_id


class TestClassify:
    """Tests pour la classification par extension."""

    @pytest.mark.parametrize(
        "name", ["a.mp4", "a.mkv", "a.avi", "a.mov", "a.wmv", "a.flv", "a.m4v", "a.webm"]
    )
    def test_video_extensions(self, name: str) -> None:
        assert classify(Path(name)) is MediaFileType.VIDEO

    @pytest.mark.parametrize("name", ["a.srt", "a.ass", "a.vtt", "a.sub", "a.ssa", "a.idx"])
    def test_subtitle_extensions(self, name: str) -> None:
        assert classify(Path(name)) is MediaFileType.SUBTITLE

    def test_case_insensitive(self) -> None:
        """Les extensions en majuscules sont reconnues."""
        assert classify(Path("MOVIE.MKV")) is MediaFileType.VIDEO
        assert classify(Path("Movie.SRT")) is MediaFileType.SUBTITLE

    def test_unknown(self) -> None:
        assert classify(Path("notes.txt")) is MediaFileType.UNKNOWN
        assert classify(Path("README")) is MediaFileType.UNKNOWN


class TestScanDirectory:
    """Tests pour scan_directory."""

    def test_non_recursive_lists_root_only(self, make_files) -> None:
        """Sans recursion, les sous-repertoires sont ignores."""
        root = make_files({"b.mkv": "", "a.srt": "", "sub/c.srt": ""})

        files = FileDiscoveryService().scan_directory(root)

        assert [f.name for f in files] == ["a.srt", "b.mkv"]

    def test_recursive_walk_is_sorted(self, make_files) -> None:
        """Fichiers tries par nom, puis sous-repertoires dans l'ordre."""
        root = make_files({
            "z.mkv": "",
            "a.srt": "",
            "s2/e2.srt": "",
            "s1/e1.mkv": "",
            "s1/deep/e1.srt": "",
        })

        files = FileDiscoveryService().scan_directory(root, recursive=True)

        assert [f.relative_path for f in files] == [
            "a.srt",
            "z.mkv",
            "s1/e1.mkv",
            "s1/deep/e1.srt",
            "s2/e2.srt",
        ]

    def test_unknown_files_are_kept(self, make_files) -> None:
        """Les fichiers inconnus sont retournes (pour l'empreinte du cache)."""
        root = make_files({"movie.mkv": "", "notes.txt": "hello"})

        files = FileDiscoveryService().scan_directory(root)

        types = {f.name: f.file_type for f in files}
        assert types["notes.txt"] is MediaFileType.UNKNOWN

    def test_media_file_fields(self, make_files) -> None:
        """Chemin absolu, taille, extension et identifiant calcule sur le chemin relatif."""
        root = make_files({"season/Show.E01.SRT": "12345"})

        [media] = FileDiscoveryService().scan_directory(root, recursive=True)

        assert media.path == root / "season" / "Show.E01.SRT"
        assert media.path.is_absolute()
        assert media.size == 5
        assert media.extension == "srt"
        assert media.stem == "Show.E01"
        assert media.relative_path == "season/Show.E01.SRT"
        assert media.id == generate_file_id("season/Show.E01.SRT", 5)

    def test_ids_stable_across_scans(self, make_files) -> None:
        """Deux scans du meme repertoire donnent les memes identifiants."""
        root = make_files({"movie.mkv": "x", "movie.srt": "y"})
        discovery = FileDiscoveryService()

        first = [f.id for f in discovery.scan_directory(root)]
        second = [f.id for f in discovery.scan_directory(root)]

        assert first == second

    def test_descriptor_format(self, make_files) -> None:
        root = make_files({"movie.mkv": ""})

        [media] = FileDiscoveryService().scan_directory(root)

        assert media.descriptor() == f"ID:{media.id} | Name:movie.mkv | Path:movie.mkv"

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        """Un repertoire introuvable leve DiscoveryError."""
        with pytest.raises(DiscoveryError) as exc_info:
            FileDiscoveryService().scan_directory(tmp_path / "missing")

        assert exc_info.value.reason == "path not found"

    def test_file_instead_of_directory_raises(self, make_files) -> None:
        root = make_files({"movie.mkv": ""})

        with pytest.raises(DiscoveryError):
            FileDiscoveryService().scan_directory(root / "movie.mkv")

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert FileDiscoveryService().scan_directory(tmp_path) == []


class TestScanFiles:
    """Tests pour scan_files (liste explicite)."""

    def test_relative_to_given_root(self, make_files) -> None:
        root = make_files({"movie.mkv": "", "movie.srt": ""})

        files = FileDiscoveryService().scan_files(
            [root / "movie.srt", root / "movie.mkv"], root=root
        )

        assert [f.relative_path for f in files] == ["movie.mkv", "movie.srt"]

    def test_default_root_is_common_parent(self, make_files) -> None:
        root = make_files({"a/movie.mkv": "", "b/movie.srt": ""})

        files = FileDiscoveryService().scan_files([root / "a/movie.mkv", root / "b/movie.srt"])

        assert [f.relative_path for f in files] == ["a/movie.mkv", "b/movie.srt"]

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(DiscoveryError):
            FileDiscoveryService().scan_files([tmp_path / "ghost.srt"])

    def test_empty_list(self) -> None:
        assert FileDiscoveryService().scan_files([]) == []
