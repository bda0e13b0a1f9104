"""
Entités fichiers média.

Un MediaFile représente un fichier découvert lors du scan d'un répertoire :
vidéo, sous-titre, ou fichier inconnu (conservé pour l'empreinte du cache).
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class MediaFileType(Enum):
    """Classification d'un fichier découvert."""

    VIDEO = "video"
    SUBTITLE = "subtitle"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class MediaFile:
    """
    Fichier découvert dans un répertoire scanné.

    Attributs :
        id : Identifiant stable "file_<16 hex>" envoyé à l'IA
        name : Nom du fichier (avec extension)
        path : Chemin absolu sur le disque
        file_type : Vidéo, sous-titre ou inconnu
        size : Taille en octets
        relative_path : Chemin relatif à la racine du scan (séparateurs "/")
        extension : Extension en minuscules, sans le point
    """

    id: str
    name: str
    path: Path
    file_type: MediaFileType
    size: int
    relative_path: str
    extension: str

    @property
    def stem(self) -> str:
        """Nom du fichier sans extension."""
        return self.path.stem

    @property
    def is_video(self) -> bool:
        return self.file_type is MediaFileType.VIDEO

    @property
    def is_subtitle(self) -> bool:
        return self.file_type is MediaFileType.SUBTITLE

    def descriptor(self) -> str:
        """Ligne descriptive transmise à l'IA (ID, nom, chemin relatif)."""
        return f"ID:{self.id} | Name:{self.name} | Path:{self.relative_path}"
