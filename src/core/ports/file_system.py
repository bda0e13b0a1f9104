"""
Interface port pour le système de fichiers.

Opérations utilisées par la relocalisation des sous-titres. Les méthodes
de mutation lèvent OSError en cas d'échec : le relocalisateur convertit
ces erreurs en résultats d'opération.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class IFileSystem(ABC):
    """
    Interface pour les opérations sur les fichiers.

    Définit les opérations nécessaires pour renommer, copier, déplacer
    et sauvegarder les sous-titres.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Vérifie si un chemin existe."""
        ...

    @abstractmethod
    def rename(self, source: Path, destination: Path) -> None:
        """
        Renomme un fichier dans son répertoire.

        Args :
            source : Chemin actuel
            destination : Nouveau chemin

        Raises :
            OSError : Source absente, permission refusée...
        """
        ...

    @abstractmethod
    def copy(self, source: Path, destination: Path) -> None:
        """
        Copie un fichier, en créant les répertoires parents si nécessaire.

        La source n'est jamais supprimée.
        """
        ...

    @abstractmethod
    def move(self, source: Path, destination: Path) -> None:
        """
        Déplace un fichier, en créant les répertoires parents si nécessaire.

        Bascule sur copie + suppression entre systèmes de fichiers différents.
        """
        ...

    @abstractmethod
    def backup(self, path: Path) -> Path:
        """
        Crée une copie de sauvegarde "<nom>.backup" à côté du fichier,
        sans jamais écraser une sauvegarde existante.

        Retourne :
            Chemin de la sauvegarde créée
        """
        ...
