"""
Configuration du logging de l'application via loguru.

Deux sorties :
- console (stderr) colorée, pour suivre une session d'appariement en direct
- fichier JSON avec rotation, qui conserve les appels IA et les opérations
  de relocalisation pour analyse ultérieure
"""

import sys
from pathlib import Path

from loguru import logger

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/subpair.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau minimum pour la console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin du fichier de log JSON
        rotation_size : Taille avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs conservés
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format=_CONSOLE_FORMAT,
        colorize=True,
    )

    # Le fichier capture tout, y compris le niveau DEBUG
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configure", log_file=str(log_file), level=log_level)


def verbosity_to_level(verbose: int, quiet: bool, default: str = "INFO") -> str:
    """Traduit les options -v/-q de la CLI en niveau loguru."""
    if quiet:
        return "ERROR"
    if verbose >= 1:
        return "DEBUG"
    return default
