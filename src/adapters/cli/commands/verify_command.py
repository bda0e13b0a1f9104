"""Commande CLI verify : evaluation par l'IA d'un appariement precis."""

import asyncio
from typing import Annotated, Optional

import typer

from src.adapters.ai.retry import retry_with_backoff
from src.adapters.cli.helpers import console, with_container
from src.core.exceptions import SubpairError
from src.core.value_objects import VerificationRequest


def verify(
    video: Annotated[str, typer.Argument(help="Nom du fichier video")],
    subtitle: Annotated[str, typer.Argument(help="Nom du fichier sous-titre")],
    factors: Annotated[
        Optional[list[str]],
        typer.Option("--factor", "-f", help="Facteur d'appariement (repetable)"),
    ] = None,
) -> None:
    """Demande a l'IA un score de confiance pour un couple video / sous-titre."""
    asyncio.run(_verify_async(video, subtitle, factors or []))


@with_container()
async def _verify_async(container, video: str, subtitle: str, factors: list[str]) -> None:
    """Implementation async de la commande verify."""
    config = container.config()
    request = VerificationRequest(
        video_file=video,
        subtitle_file=subtitle,
        match_factors=tuple(factors),
    )

    try:
        client = container.ai_client()
    except SubpairError as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1)

    try:
        # Relance l'operation complete (appel + parsing) en cas de reponse mal formee
        score = await retry_with_backoff(
            lambda: client.verify_match(request), config.retry_config
        )
    except SubpairError as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1)
    finally:
        await client.close()

    color = "green" if score.score * 100 >= config.match_confidence_threshold else "yellow"
    console.print(f"Score: [{color}]{score.score:.0%}[/{color}]")
    for factor in score.factors:
        console.print(f"  - {factor}")
