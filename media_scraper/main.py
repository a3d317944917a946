"""
Point d'entrée CLI de MediaScraper.

Configure le logging et monte les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli import helpers
from .adapters.cli.commands import (
    batch,
    fix_assets,
    match,
    move_to_inbox,
    preview,
    process_app,
    recognize,
    refresh,
    scan_app,
    search,
    stats,
    supplement,
)
from .config import Settings
from .logging_config import configure_logging

app = typer.Typer(
    name="media-scraper",
    help="Organisation de médiathèque et génération de métadonnées",
)

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
    """MediaScraper - Organisation de médiathèque personnelle."""
    state["quiet"] = quiet
    state["verbose"] = 0 if quiet else verbose

    settings = get_config()
    configure_logging(settings, console_level=_console_level(settings))
    logger.debug(f"MediaScraper v{__version__}")


# Inventaire
app.add_typer(scan_app, name="scan")
app.command()(stats)

# Identification
app.command()(search)
app.command()(match)
app.command()(recognize)

# Reconciliation
app.add_typer(process_app, name="process")
app.command()(preview)
app.command()(batch)
app.command()(refresh)
app.command()(supplement)
app.command(name="fix-assets")(fix_assets)
app.command(name="move-to-inbox")(move_to_inbox)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return helpers.container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"Inbox : {config.inbox_dir}")
    typer.echo(f"Séries : {config.tv_dir}")
    typer.echo(f"Films : {config.movies_dir}")
    typer.echo(f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'}")
    typer.echo(f"Reconnaissance Dify : {'activée' if config.dify_enabled else 'désactivée'}")
    typer.echo(f"Langue : {config.language}")
    typer.echo(f"Signature NFO : {config.nfo_generator}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"MediaScraper v{__version__}")


def _console_level(settings: Settings) -> str:
    if state["quiet"]:
        return "ERROR"
    if state["verbose"]:
        return "DEBUG"
    return settings.log_level


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
