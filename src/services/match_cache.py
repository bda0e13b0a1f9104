"""
Cache persistant des plans d'appariement calcules en dry-run.

Une simulation suivie d'une execution reelle ne doit contacter l'IA
qu'une seule fois. Le plan calcule est donc sauvegarde avec :
- l'empreinte (snapshot) de tous les fichiers decouverts
- une empreinte de la configuration active
- la version du schema du cache

Au run suivant, si les trois concordent, les operations sont rejouees
telles quelles (repertoires cibles compris) sans appel IA.

Le cache est un unique fichier JSON, lu entierement et reecrit de facon
atomique (fichier temporaire + os.replace). Un fichier absent, illisible
ou corrompu est un simple cache miss.
"""

import hashlib
import json
import os
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from loguru import logger

from src.core.entities import MediaFile
from src.core.value_objects import MatchOperation, RelocationMode

if TYPE_CHECKING:
    from src.config import Settings

# Toute modification du format invalide les caches existants
CACHE_VERSION = "2.0"


@dataclass(frozen=True)
class SnapshotItem:
    """Etat d'un fichier decouvert (chemin relatif, taille, mtime en secondes, type)."""

    name: str
    size: int
    mtime: int
    file_type: str


@dataclass
class CacheData:
    """Contenu du fichier de cache."""

    directory: str
    file_snapshot: list[SnapshotItem]
    match_operations: list[MatchOperation]
    ai_model_used: str
    config_hash: str
    created_at: int = field(default_factory=lambda: int(time.time()))
    cache_version: str = CACHE_VERSION


def build_snapshot(files: list[MediaFile]) -> list[SnapshotItem]:
    """Empreinte ordonnee de tous les fichiers decouverts (inconnus compris)."""
    snapshot = []
    for media_file in files:
        stat = media_file.path.stat()
        snapshot.append(
            SnapshotItem(
                name=media_file.relative_path,
                size=stat.st_size,
                mtime=int(stat.st_mtime),
                file_type=media_file.file_type.value,
            )
        )
    return snapshot


def compute_config_hash(
    settings: "Settings",
    recursive: bool,
    threshold: int,
    mode: RelocationMode,
) -> str:
    """
    Empreinte SHA-256 des parametres qui influencent le plan.

    Fournisseur, modele, URL, temperature, longueur des apercus, recursion,
    seuil de confiance et mode de relocalisation.
    """
    relevant = {
        "provider": settings.ai_provider,
        "model": settings.ai_model,
        "base_url": settings.ai_base_url.rstrip("/"),
        "temperature": settings.ai_temperature,
        "max_sample_length": settings.ai_max_sample_length,
        "recursive": recursive,
        "threshold": threshold,
        "mode": mode.value,
    }
    canonical = json.dumps(relevant, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def _operation_to_dict(operation: MatchOperation) -> dict[str, Any]:
    return {
        "subtitle_path": str(operation.subtitle_path),
        "target_path": str(operation.target_path),
        "video_path": str(operation.video_path),
        "mode": operation.mode.value,
        "confidence": operation.confidence,
        "reasoning": list(operation.reasoning),
    }


def _operation_from_dict(data: dict[str, Any]) -> MatchOperation:
    return MatchOperation(
        subtitle_path=Path(data["subtitle_path"]),
        target_path=Path(data["target_path"]),
        video_path=Path(data["video_path"]),
        mode=RelocationMode(data["mode"]),
        confidence=float(data["confidence"]),
        reasoning=tuple(str(r) for r in data["reasoning"]),
    )


def cache_to_dict(cache: CacheData) -> dict[str, Any]:
    """Serialise un CacheData en dictionnaire JSON."""
    return {
        "cache_version": cache.cache_version,
        "directory": cache.directory,
        "file_snapshot": [
            {
                "name": item.name,
                "size": item.size,
                "mtime": item.mtime,
                "file_type": item.file_type,
            }
            for item in cache.file_snapshot
        ],
        "match_operations": [_operation_to_dict(op) for op in cache.match_operations],
        "created_at": cache.created_at,
        "ai_model_used": cache.ai_model_used,
        "config_hash": cache.config_hash,
    }


def cache_from_dict(data: dict[str, Any]) -> CacheData:
    """
    Reconstruit un CacheData.

    Raises:
        KeyError, TypeError, ValueError: Document de forme inattendue
    """
    return CacheData(
        cache_version=str(data["cache_version"]),
        directory=str(data["directory"]),
        file_snapshot=[
            SnapshotItem(
                name=str(item["name"]),
                size=int(item["size"]),
                mtime=int(item["mtime"]),
                file_type=str(item["file_type"]),
            )
            for item in data["file_snapshot"]
        ],
        match_operations=[_operation_from_dict(op) for op in data["match_operations"]],
        created_at=int(data["created_at"]),
        ai_model_used=str(data["ai_model_used"]),
        config_hash=str(data["config_hash"]),
    )


class DryRunCache:
    """
    Cache a entree unique des plans d'appariement.

    Passe explicitement a MatchService (pas d'etat global) pour que chaque
    invocation, et chaque test, choisisse son emplacement.

    Usage:
        cache = DryRunCache(Path("~/.subpair/match_cache.json").expanduser())
        operations = cache.lookup(directory, snapshot, config_hash)
        if operations is None:
            ...
            cache.store(directory, snapshot, config_hash, model, operations)
    """

    def __init__(self, cache_file: Path) -> None:
        self._cache_file = Path(cache_file)

    @property
    def cache_file(self) -> Path:
        return self._cache_file

    def load(self) -> Optional[CacheData]:
        """Charge le cache, ou None s'il est absent ou inexploitable."""
        if not self._cache_file.exists():
            return None
        try:
            data = json.loads(self._cache_file.read_text(encoding="utf-8"))
            return cache_from_dict(data)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.debug("Cache illisible, ignore", cache_file=str(self._cache_file), error=str(e))
        except (KeyError, TypeError, ValueError) as e:
            logger.debug("Cache de forme inattendue, ignore", cache_file=str(self._cache_file), error=repr(e))
        return None

    def lookup(
        self, directory: Path, snapshot: list[SnapshotItem], config_hash: str
    ) -> Optional[list[MatchOperation]]:
        """
        Retourne les operations en cache si tout concorde, sinon None.

        Concordance exigee : version du schema, repertoire, snapshot
        (ordre compris) et empreinte de configuration.
        """
        cached = self.load()
        if cached is None:
            return None
        if cached.cache_version != CACHE_VERSION:
            logger.debug("Cache invalide: version", found=cached.cache_version)
            return None
        if cached.directory != str(directory):
            logger.debug("Cache invalide: autre repertoire", cached=cached.directory)
            return None
        if cached.config_hash != config_hash:
            logger.debug("Cache invalide: configuration modifiee")
            return None
        if cached.file_snapshot != snapshot:
            logger.debug("Cache invalide: fichiers modifies")
            return None
        logger.info(
            "Plan rejoue depuis le cache",
            directory=str(directory),
            operations=len(cached.match_operations),
        )
        return list(cached.match_operations)

    def store(
        self,
        directory: Path,
        snapshot: list[SnapshotItem],
        config_hash: str,
        ai_model: str,
        operations: list[MatchOperation],
    ) -> CacheData:
        """Ecrit le plan (en remplacant toute entree precedente) de facon atomique."""
        cache = CacheData(
            directory=str(directory),
            file_snapshot=list(snapshot),
            match_operations=list(operations),
            ai_model_used=ai_model,
            config_hash=config_hash,
        )
        self._cache_file.parent.mkdir(parents=True, exist_ok=True)
        temp = self._cache_file.with_name(f".tmp_{uuid.uuid4().hex}_{self._cache_file.name}")
        try:
            temp.write_text(
                json.dumps(cache_to_dict(cache), ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
            os.replace(temp, self._cache_file)
        except OSError:
            if temp.exists():
                temp.unlink()
            raise
        logger.debug("Cache sauvegarde", cache_file=str(self._cache_file), operations=len(operations))
        return cache

    def clear(self) -> bool:
        """Supprime le fichier de cache. Retourne True s'il existait."""
        try:
            self._cache_file.unlink()
        except FileNotFoundError:
            return False
        return True

    def describe(self) -> Optional[dict[str, Any]]:
        """Resume du cache pour la commande `cache status`, ou None."""
        data = self.load()
        if data is None:
            return None
        return {
            "cache_file": str(self._cache_file),
            "directory": data.directory,
            "created_at": data.created_at,
            "ai_model_used": data.ai_model_used,
            "cache_version": data.cache_version,
            "outdated": data.cache_version != CACHE_VERSION,
            "files": len(data.file_snapshot),
            "operations": len(data.match_operations),
        }
