"""
Entités du domaine.

- MediaFile : fichier découvert (vidéo, sous-titre ou inconnu)
- MediaFileType : classification par extension
"""

from src.core.entities.media import MediaFile, MediaFileType

__all__ = ["MediaFile", "MediaFileType"]
