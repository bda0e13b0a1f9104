"""
Affichage Rich des resultats de la commande match.

- render_match_report : tableau des operations, sous-titres ignores et bilan
"""

from rich.console import Console
from rich.table import Table

from src.services.match_service import MatchReport

_MODE_LABELS = {
    "rename": "renommage",
    "copy": "copie",
    "move": "deplacement",
}


def _operations_table(report: MatchReport) -> Table:
    title = "Operations prevues" if report.dry_run else "Operations"
    table = Table(title=title, show_header=True)
    table.add_column("Sous-titre", style="cyan")
    table.add_column("Cible", style="green")
    table.add_column("Mode")
    table.add_column("Confiance", justify="right")
    table.add_column("Statut")

    results = report.results or [None] * len(report.plan.operations)
    for op, result in zip(report.plan.operations, results):
        if result is None or result.dry_run:
            status = "[dim]apercu[/dim]"
        elif result.success:
            status = "[green]OK[/green]"
        else:
            status = f"[red]echec[/red] {result.error or ''}"
        table.add_row(
            str(op.subtitle_path),
            str(op.target_path),
            _MODE_LABELS.get(op.mode.value, op.mode.value),
            f"{op.confidence:.0%}",
            status,
        )
    return table


def _skipped_table(report: MatchReport) -> Table:
    table = Table(title="Sous-titres ignores", show_header=True)
    table.add_column("Sous-titre", style="yellow")
    table.add_column("Raison", style="dim")
    for skipped in report.plan.skipped:
        table.add_row(str(skipped.subtitle_path), skipped.reason)
    return table


def render_match_report(report: MatchReport, console: Console) -> None:
    """Affiche le bilan d'un repertoire."""
    origin = ""
    if report.from_cache:
        origin = " [bold cyan](plan en cache, aucun appel IA)[/bold cyan]"
    console.print(f"\n[bold]{report.directory}[/bold]{origin}")

    if not report.plan.operations and not report.plan.skipped:
        console.print("[dim]Aucun sous-titre a traiter.[/dim]")
        return

    if report.plan.operations:
        console.print(_operations_table(report))
    if report.plan.skipped:
        console.print(_skipped_table(report))

    if report.dry_run:
        console.print(
            f"[yellow]Mode simulation:[/yellow] {len(report.plan.operations)} "
            "operation(s), aucun fichier modifie"
        )
    else:
        failed = len(report.failures)
        succeeded = len(report.results) - failed
        console.print(
            f"[green]{succeeded} reussie(s)[/green], "
            f"[red]{failed} en echec[/red]"
        )
