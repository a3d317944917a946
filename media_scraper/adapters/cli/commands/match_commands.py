"""
Commandes CLI d'identification (search, match, recognize).
"""

from typing import Annotated, Optional

import typer
from rich.panel import Panel
from rich.table import Table

from media_scraper.adapters.cli import helpers
from media_scraper.adapters.cli.helpers import async_command, console, parse_kind
from media_scraper.core.ports.api_clients import CatalogError


@async_command
async def search(
    query: Annotated[str, typer.Argument(help="Titre a rechercher")],
    kind: Annotated[
        Optional[str], typer.Option("--type", "-t", help="tv, movie (defaut: les deux)")
    ] = None,
    year: Annotated[Optional[int], typer.Option("--year", "-y", help="Annee")] = None,
) -> None:
    """Recherche un titre dans le catalogue."""
    matcher = helpers.container.matcher_service()
    try:
        results = await matcher.search(parse_kind(kind), query, year)
    except CatalogError as e:
        console.print(f"[red]Erreur catalogue: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Resultats pour '{query}' ({len(results)})")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Type")
    table.add_column("Titre", style="bold")
    table.add_column("Titre original")
    table.add_column("Date")
    for result in results:
        table.add_row(
            str(result.id),
            result.media_type or "",
            result.name,
            result.original_name or "",
            result.date or "",
        )
    console.print(table)


@async_command
async def match(
    path: Annotated[str, typer.Argument(help="Chemin ou nom du fichier")],
    kind: Annotated[
        Optional[str], typer.Option("--type", "-t", help="tv, movie (defaut: les deux)")
    ] = None,
    title: Annotated[Optional[str], typer.Option("--title", help="Titre impose")] = None,
    year: Annotated[Optional[int], typer.Option("--year", "-y", help="Annee imposee")] = None,
) -> None:
    """Cherche automatiquement le meilleur candidat pour un fichier."""
    matcher = helpers.container.matcher_service()
    try:
        result = await matcher.auto_match(path, parse_kind(kind), title, year)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    except CatalogError as e:
        console.print(f"[red]Erreur catalogue: {e}[/red]")
        raise typer.Exit(1)

    if result.result is None:
        console.print(f"[yellow]Aucun resultat pour '{result.title}'[/yellow]")
        raise typer.Exit(1)

    status = "[green]correspondance[/green]" if result.matched else "[yellow]ambigu[/yellow]"
    console.print(f"{status} pour '{result.title}' ({result.year or '?'})")

    table = Table()
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Titre", style="bold")
    table.add_column("Date")
    table.add_column("Score", justify="right")
    for candidate in result.candidates:
        table.add_row(
            str(candidate.id),
            candidate.name,
            candidate.date or "",
            f"{candidate.score:.2f}",
        )
    console.print(table)


@async_command
async def recognize(
    path: Annotated[str, typer.Argument(help="Chemin a identifier")],
) -> None:
    """Identifie un chemin via le service de reconnaissance (Dify)."""
    matcher = helpers.container.matcher_service()
    recognition = await matcher.recognize(path)
    if recognition is None:
        console.print("[yellow]Reconnaissance indisponible ou sans resultat[/yellow]")
        raise typer.Exit(1)

    lines = [
        f"[bold]Titre:[/bold] {recognition.title}",
        f"[bold]Type:[/bold] {recognition.media_type}",
        f"[bold]Annee:[/bold] {recognition.year or '?'}",
    ]
    if recognition.season is not None:
        lines.append(f"[bold]Saison/Episode:[/bold] {recognition.season}/{recognition.episode or '?'}")
    if recognition.imdb_id:
        lines.append(f"[bold]IMDb:[/bold] {recognition.imdb_id}")
    if recognition.tmdb_id:
        lines.append(f"[bold]TMDB:[/bold] {recognition.tmdb_id} ({recognition.tmdb_name or ''})")
    lines.append(f"[bold]Confiance:[/bold] {recognition.confidence:.0%}")
    if recognition.reason:
        lines.append(f"[dim]{recognition.reason}[/dim]")
    console.print(Panel("\n".join(lines), title=path))
