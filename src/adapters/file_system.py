"""
Adaptateur pour les operations sur le systeme de fichiers.

Implementation concrete de IFileSystem utilisee par la relocalisation
des sous-titres. Les erreurs OSError remontent a l'appelant, qui les
transforme en resultat d'operation.
"""

import os
import shutil
import uuid
from pathlib import Path

from loguru import logger

from src.core.ports.file_system import IFileSystem

BACKUP_SUFFIX = ".backup"


class FileSystemAdapter(IFileSystem):
    """Implementation de IFileSystem pour le systeme de fichiers reel."""

    def exists(self, path: Path) -> bool:
        """Verifie si un chemin existe."""
        return path.exists()

    def rename(self, source: Path, destination: Path) -> None:
        """Renomme un fichier (os.replace sur le meme systeme de fichiers)."""
        if not source.is_file():
            raise FileNotFoundError(f"Fichier source introuvable: {source}")
        os.replace(source, destination)

    def copy(self, source: Path, destination: Path) -> None:
        """
        Copie un fichier de la source vers la destination.

        Cree les repertoires parents si necessaire. La copie passe par un
        fichier temporaire pour ne jamais laisser de destination tronquee.
        """
        if not source.is_file():
            raise FileNotFoundError(f"Fichier source introuvable: {source}")
        destination.parent.mkdir(parents=True, exist_ok=True)
        temp = destination.with_name(f".tmp_{uuid.uuid4().hex}_{destination.name}")
        try:
            shutil.copy2(source, temp)
            os.replace(temp, destination)
        except OSError:
            if temp.exists():
                temp.unlink()
            raise

    def move(self, source: Path, destination: Path) -> None:
        """
        Deplace un fichier de maniere atomique.

        Utilise os.replace sur le meme systeme de fichiers. Entre systemes
        de fichiers differents, copie via un fichier temporaire puis
        supprime la source.
        """
        if not source.is_file():
            raise FileNotFoundError(f"Fichier source introuvable: {source}")
        destination.parent.mkdir(parents=True, exist_ok=True)
        try:
            os.replace(source, destination)
        except OSError:
            logger.debug(
                "Deplacement inter-systemes de fichiers, copie puis suppression",
                source=str(source),
            )
            self.copy(source, destination)
            source.unlink()

    def backup(self, path: Path) -> Path:
        """
        Copie le fichier en "<nom>.backup" dans le meme repertoire.

        Une sauvegarde existante n'est jamais ecrasee : le nom libre suivant
        est utilise ("<nom>.backup.1", "<nom>.backup.2", ...).
        """
        backup_path = path.with_name(path.name + BACKUP_SUFFIX)
        counter = 1
        while backup_path.exists():
            backup_path = path.with_name(f"{path.name}{BACKUP_SUFFIX}.{counter}")
            counter += 1
        shutil.copy2(path, backup_path)
        return backup_path
