"""
Commandes CLI de gestion du cache des simulations (status, clear).
"""

from datetime import datetime
from typing import Annotated

import typer

from src.adapters.cli.helpers import console
from src.container import Container
from src.services.match_cache import DryRunCache

cache_app = typer.Typer(
    name="cache",
    help="Gestion du cache des simulations (dry-run)",
    rich_markup_mode="rich",
)


def _get_cache() -> DryRunCache:
    return Container().match_cache()


@cache_app.command("status")
def cache_status() -> None:
    """Affiche le contenu du cache."""
    cache = _get_cache()
    summary = cache.describe()
    if summary is None:
        console.print(f"[dim]Aucun cache exploitable ({cache.cache_file})[/dim]")
        return

    created = datetime.fromtimestamp(summary["created_at"]).strftime("%Y-%m-%d %H:%M:%S")
    outdated = " [yellow](version obsolete)[/yellow]" if summary["outdated"] else ""
    console.print(f"[bold cyan]Fichier:[/bold cyan] {summary['cache_file']}")
    console.print(f"[bold cyan]Repertoire:[/bold cyan] {summary['directory']}")
    console.print(f"[bold cyan]Cree le:[/bold cyan] {created}")
    console.print(f"[bold cyan]Modele:[/bold cyan] {summary['ai_model_used']}")
    console.print(f"[bold cyan]Version:[/bold cyan] {summary['cache_version']}{outdated}")
    console.print(
        f"[bold cyan]Contenu:[/bold cyan] {summary['files']} fichier(s), "
        f"{summary['operations']} operation(s)"
    )


@cache_app.command("clear")
def cache_clear(
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Ne rien afficher"),
    ] = False,
) -> None:
    """Supprime le cache des simulations."""
    cache = _get_cache()
    removed = cache.clear()
    if quiet:
        return
    if removed:
        console.print(f"[green]Cache supprime:[/green] {cache.cache_file}")
    else:
        console.print("[dim]Aucun cache a supprimer[/dim]")
