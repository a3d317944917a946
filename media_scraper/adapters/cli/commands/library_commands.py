"""
Commandes CLI d'inventaire de la mediatheque (scan, stats).
"""

from typing import Annotated

import typer
from rich.table import Table
from rich.tree import Tree

from media_scraper.adapters.cli import helpers
from media_scraper.adapters.cli.helpers import console

scan_app = typer.Typer(help="Inventaire des repertoires de la mediatheque")


def _flag(value: bool) -> str:
    return "[green]oui[/green]" if value else "[red]non[/red]"


@scan_app.command("shows")
def scan_shows(
    assets: Annotated[
        bool, typer.Option("--assets", help="Inclure les affiches et NFO de chaque saison")
    ] = False,
) -> None:
    """Liste les series de la racine TV."""
    paths = helpers.container.media_paths()
    shows = helpers.container.scanner_service().scan_shows(paths.tv, include_assets=assets)

    table = Table(title=f"Series ({len(shows)})")
    table.add_column("Serie", style="bold")
    table.add_column("Annee", justify="right")
    table.add_column("Saisons", justify="right")
    table.add_column("Episodes", justify="right")
    table.add_column("NFO", justify="center")
    table.add_column("Traite", justify="center")
    table.add_column("A completer", justify="right")
    if assets:
        table.add_column("Affiche", justify="center")
    for show in shows:
        row = [
            show.name,
            str(show.year or ""),
            str(len(show.seasons)),
            str(show.episode_count),
            _flag(show.has_nfo),
            _flag(show.is_processed),
            str(show.supplement_count or ""),
        ]
        if assets:
            row.append(_flag(bool(show.assets and show.assets.has_poster)))
        table.add_row(*row)
    console.print(table)


@scan_app.command("movies")
def scan_movies(
    assets: Annotated[
        bool, typer.Option("--assets", help="Inclure les affiches et fanarts")
    ] = False,
) -> None:
    """Liste les films de la racine Films."""
    paths = helpers.container.media_paths()
    movies = helpers.container.scanner_service().scan_movies(paths.movies, include_assets=assets)

    table = Table(title=f"Films ({len(movies)})")
    table.add_column("Film", style="bold")
    table.add_column("Annee", justify="right")
    table.add_column("Fichier")
    table.add_column("NFO", justify="center")
    table.add_column("Traite", justify="center")
    if assets:
        table.add_column("Affiche", justify="center")
        table.add_column("Fanart", justify="center")
    for movie in movies:
        row = [
            movie.name,
            str(movie.year or ""),
            movie.file.name if movie.file else "",
            _flag(movie.has_nfo),
            _flag(movie.is_processed),
        ]
        if assets:
            row.append(_flag(bool(movie.assets and movie.assets.has_poster)))
            row.append(_flag(bool(movie.assets and movie.assets.has_fanart)))
        table.add_row(*row)
    console.print(table)


@scan_app.command("inbox")
def scan_inbox(
    grouped: Annotated[
        bool, typer.Option("--grouped", "-g", help="Regrouper par repertoire")
    ] = False,
) -> None:
    """Liste les fichiers video de l'inbox."""
    paths = helpers.container.media_paths()
    scanner = helpers.container.scanner_service()

    if grouped:
        groups = scanner.scan_inbox_grouped(paths.inbox)
        tree = Tree(f"[bold blue]{paths.inbox}[/bold blue]")
        for group in groups:
            summary = group.summary
            branch = tree.add(
                f"[cyan]{group.name}/[/cyan] "
                f"[dim]({summary.tv} serie, {summary.movie} film, {summary.unknown} inconnu)[/dim]"
            )
            for media in group.files:
                branch.add(f"{media.name} [dim]{media.kind.value}[/dim]")
        console.print(tree)
        return

    files = scanner.scan_inbox(paths.inbox)
    table = Table(title=f"Inbox ({len(files)})")
    table.add_column("Fichier", style="bold")
    table.add_column("Type")
    table.add_column("Titre")
    table.add_column("Annee", justify="right")
    table.add_column("Episode")
    for media in files:
        parsed = media.parsed
        episode = ""
        if parsed.episode is not None:
            episode = f"S{parsed.season or 1:02d}E{parsed.episode:02d}"
        table.add_row(
            media.relative_path,
            media.kind.value,
            parsed.title,
            str(parsed.year or ""),
            episode,
        )
    console.print(table)


def stats() -> None:
    """Affiche les statistiques de la mediatheque."""
    paths = helpers.container.media_paths()
    library = helpers.container.scanner_service().library_stats(paths)

    table = Table(title="Mediatheque")
    table.add_column("Categorie", style="bold")
    table.add_column("Total", justify="right")
    table.add_column("Traites", justify="right")
    table.add_row("Series", str(library.tv_shows), str(library.tv_processed))
    table.add_row("Episodes", str(library.tv_episodes), "")
    table.add_row("Films", str(library.movies), str(library.movies_processed))
    table.add_row("Inbox", str(library.inbox), "")
    console.print(table)
