"""Commande CLI match : appariement des sous-titres avec leurs videos."""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer

from src.adapters.cli.helpers import console, suppress_loguru, with_container
from src.adapters.cli.match_display import render_match_report
from src.core.exceptions import SubpairError
from src.core.value_objects import RelocationMode
from src.services.match_service import MatchRequest


def resolve_mode(copy: bool, move: bool) -> RelocationMode:
    """Mode de relocalisation selon les options (--copy et --move sont exclusifs)."""
    if copy and move:
        raise typer.BadParameter("--copy et --move ne peuvent pas etre combines")
    if copy:
        return RelocationMode.COPY
    if move:
        return RelocationMode.MOVE
    return RelocationMode.RENAME


def match(
    path: Annotated[
        Optional[Path],
        typer.Argument(help="Repertoire contenant videos et sous-titres"),
    ] = None,
    input_paths: Annotated[
        Optional[list[Path]],
        typer.Option("--input", "-i", help="Fichier ou repertoire a traiter (repetable)"),
    ] = None,
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Parcourir les sous-repertoires"),
    ] = False,
    confidence: Annotated[
        Optional[int],
        typer.Option(
            "--confidence",
            min=0,
            max=100,
            help="Confiance minimale 0-100 (defaut: configuration)",
        ),
    ] = None,
    copy: Annotated[
        bool,
        typer.Option("--copy", "-c", help="Copier les sous-titres a cote de la video"),
    ] = False,
    move: Annotated[
        bool,
        typer.Option("--move", "-m", help="Deplacer les sous-titres a cote de la video"),
    ] = False,
    backup: Annotated[
        bool,
        typer.Option("--backup", help="Sauvegarder les fichiers avant modification"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Simuler sans modifier les fichiers"),
    ] = False,
) -> None:
    """Apparie les sous-titres avec leurs videos et les renomme."""
    try:
        mode = resolve_mode(copy, move)
    except typer.BadParameter as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1)

    paths = ([path] if path else []) + list(input_paths or [])
    if not paths:
        console.print("[red]Erreur: indiquer un repertoire ou --input[/red]")
        raise typer.Exit(1)

    failed = asyncio.run(
        _match_async(paths, recursive, confidence, mode, backup, dry_run)
    )
    if failed:
        raise typer.Exit(1)


@with_container()
async def _match_async(
    container,
    paths: list[Path],
    recursive: bool,
    confidence: Optional[int],
    mode: RelocationMode,
    backup: bool,
    dry_run: bool,
) -> int:
    """Implementation async de la commande match. Retourne le nombre d'echecs."""
    config = container.config()
    request = MatchRequest(
        paths=paths,
        recursive=recursive,
        confidence=config.match_confidence_threshold if confidence is None else confidence,
        mode=mode,
        backup=backup,
        dry_run=dry_run,
    )

    service = container.match_service()
    try:
        reports = await service.run(request)
    except SubpairError as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1)

    with suppress_loguru():
        for report in reports:
            render_match_report(report, console)

    return sum(len(report.failures) for report in reports)
