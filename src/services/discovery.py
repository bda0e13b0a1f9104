"""
Service de decouverte des fichiers video et sous-titres.

Parcourt un repertoire (optionnellement recursif), classe chaque fichier
par extension et lui attribue un identifiant deterministe calcule a
partir de son chemin relatif a la racine du scan.

L'ordre de parcours est deterministe : entrees triees par nom, fichiers
d'un repertoire avant ses sous-repertoires. La decouverte reussit
entierement ou echoue avec DiscoveryError : aucun repertoire illisible
n'est ignore silencieusement.
"""

import os
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from src.core.entities import MediaFile, MediaFileType
from src.core.exceptions import DiscoveryError
from src.services.file_id import generate_file_id

# Extensions supportees (minuscules, sans le point)
VIDEO_EXTENSIONS: frozenset[str] = frozenset({
    "mp4", "mkv", "avi", "mov", "wmv", "flv", "m4v", "webm"
})
SUBTITLE_EXTENSIONS: frozenset[str] = frozenset({
    "srt", "ass", "vtt", "sub", "ssa", "idx"
})


def classify(path: Path) -> MediaFileType:
    """Classe un fichier selon son extension (insensible a la casse)."""
    extension = path.suffix.lower().lstrip(".")
    if extension in VIDEO_EXTENSIONS:
        return MediaFileType.VIDEO
    if extension in SUBTITLE_EXTENSIONS:
        return MediaFileType.SUBTITLE
    return MediaFileType.UNKNOWN


def _relative(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.name


def build_media_file(path: Path, root: Path, size: int) -> MediaFile:
    """Construit le MediaFile d'un chemin absolu, relativement a `root`."""
    relative_path = _relative(path, root)
    return MediaFile(
        id=generate_file_id(relative_path, size),
        name=path.name,
        path=path,
        file_type=classify(path),
        size=size,
        relative_path=relative_path,
        extension=path.suffix.lower().lstrip("."),
    )


class FileDiscoveryService:
    """
    Decouverte des fichiers d'un repertoire.

    Usage:
        discovery = FileDiscoveryService()
        files = discovery.scan_directory(Path("/media/films"), recursive=True)
        videos = [f for f in files if f.is_video]
    """

    def scan_directory(self, root: Path, recursive: bool = False) -> list[MediaFile]:
        """
        Liste tous les fichiers du repertoire (inconnus compris).

        Args:
            root: Repertoire a parcourir
            recursive: Descendre dans les sous-repertoires

        Returns:
            MediaFile dans l'ordre de parcours

        Raises:
            DiscoveryError: Repertoire introuvable, illisible ou non-repertoire
        """
        root = Path(root).expanduser().absolute()
        if not root.exists():
            raise DiscoveryError(root, "path not found")
        if not root.is_dir():
            raise DiscoveryError(root, "not a directory")

        files: list[MediaFile] = []
        self._walk(root, root, recursive, files)
        logger.debug(
            "Decouverte terminee",
            directory=str(root),
            recursive=recursive,
            files=len(files),
        )
        return files

    def _walk(
        self, directory: Path, root: Path, recursive: bool, files: list[MediaFile]
    ) -> None:
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda e: e.name)
        except PermissionError as e:
            raise DiscoveryError(directory, "permission denied") from e
        except OSError as e:
            raise DiscoveryError(directory, e.strerror or str(e)) from e

        subdirectories: list[Path] = []
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirectories.append(Path(entry.path))
                    continue
                if not entry.is_file():
                    continue
                size = entry.stat().st_size
            except OSError as e:
                raise DiscoveryError(Path(entry.path), e.strerror or str(e)) from e
            files.append(build_media_file(Path(entry.path), root, size))

        if recursive:
            for subdirectory in subdirectories:
                self._walk(subdirectory, root, recursive, files)

    def scan_files(
        self, paths: Iterable[Path], root: Optional[Path] = None
    ) -> list[MediaFile]:
        """
        Construit les MediaFile d'une liste explicite de fichiers.

        Args:
            paths: Fichiers a inclure (l'ordre est normalise par tri)
            root: Racine pour les chemins relatifs (defaut: parent commun)

        Raises:
            DiscoveryError: Fichier introuvable ou illisible
        """
        absolute = sorted({Path(p).expanduser().absolute() for p in paths})
        if not absolute:
            return []
        if root is None:
            root = Path(os.path.commonpath([p.parent for p in absolute]))
        root = Path(root).expanduser().absolute()

        files: list[MediaFile] = []
        for path in absolute:
            if not path.exists():
                raise DiscoveryError(path, "path not found")
            if not path.is_file():
                raise DiscoveryError(path, "not a file")
            try:
                size = path.stat().st_size
            except OSError as e:
                raise DiscoveryError(path, e.strerror or str(e)) from e
            files.append(build_media_file(path, root, size))
        return files
