"""
Commandes CLI de reconciliation (preview, process, batch, refresh,
supplement, fix-assets, move-to-inbox).
"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)
from rich.table import Table

from media_scraper.adapters.cli import helpers
from media_scraper.adapters.cli.helpers import (
    async_command,
    console,
    display_plan,
    display_result,
    load_items,
    parse_kind,
    suppress_loguru,
)
from media_scraper.core.entities import EpisodeSource, ProcessItem
from media_scraper.core.value_objects import MediaKind
from media_scraper.services.progress import ProgressEvent

process_app = typer.Typer(help="Range des fichiers de l'inbox dans la mediatheque")

ItemsFile = Annotated[
    Path,
    typer.Argument(
        exists=True,
        dir_okay=False,
        help="Fichier JSON: liste d'elements {kind, source_path, catalog_id, ...}",
    ),
]
CatalogId = Annotated[int, typer.Option("--id", help="ID TMDB")]
DryRun = Annotated[bool, typer.Option("--dry-run", help="Affiche le plan sans rien modifier")]


def _library_kind(value: str) -> MediaKind:
    kind = parse_kind(value)
    if kind is None:
        raise typer.BadParameter("type requis: tv ou movie")
    return kind


@async_command
async def preview(
    items_file: ItemsFile,
    as_json: Annotated[bool, typer.Option("--json", help="Sortie JSON du plan")] = False,
) -> None:
    """Calcule le plan d'un lot sans rien modifier."""
    items = load_items(items_file)
    plan = await helpers.container.reconciliation_service().generate_preview_plan(items)
    if as_json:
        typer.echo(json.dumps(plan.to_dict(), indent=2, ensure_ascii=False))
        return
    display_plan(plan, title=f"Previsualisation ({len(items)} element(s))")


@process_app.command("tv")
@async_command
async def process_tv(
    source: Annotated[Path, typer.Argument(help="Fichier episode a ranger")],
    catalog_id: CatalogId,
    show: Annotated[
        Optional[str], typer.Option("--show", "-s", help="Nom du repertoire de serie")
    ] = None,
    season: Annotated[Optional[int], typer.Option("--season", help="Numero de saison")] = None,
    episode: Annotated[Optional[int], typer.Option("--episode", help="Numero d'episode")] = None,
    dry_run: DryRun = False,
) -> None:
    """
    Range un episode dans sa serie et genere NFO et affiches.

    Saison, episode et nom de serie non fournis sont deduits du chemin.

    Exemples:
      media-scraper process tv /mnt/media/Inbox/Show.S01E01.mkv --id 1399
      media-scraper process tv ep.mkv --id 1399 --show "Show" --season 2 --episode 5
    """
    parsed = helpers.container.filename_parser().parse_from_path(f"{source.parent.name}/{source.name}")
    show_name = show or parsed.title
    if not show_name:
        console.print("[red]Nom de serie introuvable, utilisez --show[/red]")
        raise typer.Exit(1)
    season_number = season if season is not None else (parsed.season or 1)
    episodes = [
        EpisodeSource(
            source=source,
            episode=episode if episode is not None else (parsed.episode or 1),
            episode_end=None if episode is not None else parsed.episode_end,
        )
    ]

    reconciliation = helpers.container.reconciliation_service()
    if dry_run:
        item = ProcessItem(MediaKind.TV, source, catalog_id, show_name, season_number, episodes)
        display_plan(await reconciliation.generate_preview_plan([item]), title="Plan (dry-run)")
        return
    display_result(
        await reconciliation.process_tv(source, show_name, catalog_id, season_number, episodes)
    )


@process_app.command("movie")
@async_command
async def process_movie(
    source: Annotated[Path, typer.Argument(help="Fichier film a ranger")],
    catalog_id: CatalogId,
    dry_run: DryRun = False,
) -> None:
    """Range un film et genere NFO, affiche et fanart."""
    reconciliation = helpers.container.reconciliation_service()
    if dry_run:
        item = ProcessItem(MediaKind.MOVIE, source, catalog_id)
        display_plan(await reconciliation.generate_preview_plan([item]), title="Plan (dry-run)")
        return
    display_result(await reconciliation.process_movie(source, catalog_id))


@async_command
async def batch(items_file: ItemsFile) -> None:
    """
    Traite un lot d'elements sous une tache supervisee.

    Un element deja range dans la mediatheque est rafraichi au lieu d'etre
    deplace.
    """
    items = load_items(items_file)
    processor = helpers.container.batch_processor()
    bus = helpers.container.progress_bus()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        bar = progress.add_task("Traitement du lot", total=len(items) or 1)

        def on_event(event: ProgressEvent) -> None:
            progress.update(bar, completed=event.current, description=event.message or "")

        unsubscribe = bus.subscribe(on_event)
        try:
            with suppress_loguru():
                result = await processor.run_batch(items)
        finally:
            unsubscribe()

    table = Table(title=f"Lot {result.task_id}")
    table.add_column("Element", style="bold")
    table.add_column("Statut", justify="center")
    table.add_column("Message")
    for item_result in result.results:
        table.add_row(
            str(item_result.item.source_path),
            "[green]OK[/green]" if item_result.success else "[red]Echec[/red]",
            item_result.message or "",
        )
    console.print(table)
    console.print(f"[bold]Reussis:[/bold] {result.processed}  [bold]Echecs:[/bold] {result.failed}")
    if items and result.failed == len(items):
        raise typer.Exit(1)


@async_command
async def refresh(
    kind: Annotated[str, typer.Argument(help="tv ou movie")],
    path: Annotated[Path, typer.Argument(help="Repertoire de la serie ou du film")],
    catalog_id: CatalogId,
    season: Annotated[Optional[int], typer.Option("--season", help="Limiter a une saison")] = None,
    episode: Annotated[
        Optional[int], typer.Option("--episode", help="Limiter a un episode (avec --season)")
    ] = None,
) -> None:
    """Regenere les NFO d'un element deja range."""
    processor = helpers.container.batch_processor()
    display_result(
        await processor.run_refresh(_library_kind(kind), path, catalog_id, season, episode)
    )


@async_command
async def supplement(
    show_path: Annotated[
        Path, typer.Argument(help="Repertoire de la serie (relatif a la racine TV accepte)")
    ],
) -> None:
    """Genere les NFO des episodes d'une serie qui n'en ont pas."""
    processor = helpers.container.batch_processor()
    display_result(await processor.run_supplement(show_path))


@async_command
async def fix_assets(
    kind: Annotated[str, typer.Argument(help="tv ou movie")],
    path: Annotated[Path, typer.Argument(help="Repertoire de la serie ou du film")],
    catalog_id: CatalogId,
) -> None:
    """Cree les NFO et affiches manquants sans toucher aux existants."""
    processor = helpers.container.batch_processor()
    display_result(await processor.run_fix_assets(_library_kind(kind), path, catalog_id))


@async_command
async def move_to_inbox(
    source: Annotated[Path, typer.Argument(help="Fichier de la mediatheque")],
) -> None:
    """Renvoie un fichier de la mediatheque dans l'inbox."""
    display_result(await helpers.container.reconciliation_service().move_to_inbox(source))
