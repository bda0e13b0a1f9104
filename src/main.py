"""
Point d'entrée CLI de subpair.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import cache_app, match, verify
from .config import Settings
from .container import Container
from .logging_config import configure_logging, verbosity_to_level

__version__ = "0.1.0"

app = typer.Typer(
    name="subpair",
    help="Appariement des sous-titres avec leurs vidéos, assisté par IA",
)
container = Container()

# Etat global pour les options de verbosite
state = {"verbose": 0, "quiet": False}


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """subpair - Appariement de sous-titres assisté par IA."""
    state["quiet"] = quiet
    state["verbose"] = 0 if quiet else verbose
    if quiet or verbose:
        settings = get_config()
        configure_logging(
            log_level=verbosity_to_level(verbose, quiet, settings.log_level),
            log_file=settings.log_file,
            rotation_size=settings.log_rotation_size,
            retention_count=settings.log_retention_count,
        )


app.command()(match)
app.command()(verify)

# Monter cache_app comme sous-commande
app.add_typer(cache_app, name="cache")


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration subpair")
    typer.echo(f"Fournisseur IA : {config.ai_provider}")
    typer.echo(f"Modèle : {config.ai_model}")
    typer.echo(f"URL de base : {config.ai_base_url}")
    typer.echo(f"Clé API : {'configurée' if config.ai_enabled else 'absente'}")
    typer.echo(f"Seuil de confiance : {config.match_confidence_threshold}%")
    typer.echo(f"Sauvegarde : {'activée' if config.backup_enabled else 'désactivée'}")
    typer.echo(f"Workers : {config.max_concurrent_jobs}")
    typer.echo(f"Cache : {config.cache_file}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"subpair v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )
    logger.debug("Demarrage de subpair", version=__version__)

    app()


if __name__ == "__main__":
    main()
